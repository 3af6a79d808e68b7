from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class SubjectRole(str, Enum):
    student = "student"
    teacher = "teacher"


class UserSubject(SQLModel, table=True):
    """A subject name a student is enrolled in or a teacher teaches.

    Subject names are free text chosen at signup; they need not match a row in
    the subject table yet.
    """
    __tablename__ = "user_subject"
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)
    subject_name: str = Field(primary_key=True)
    role: SubjectRole = Field(default=SubjectRole.student, primary_key=True)
    position: int = Field(default=0)


class StudentTeacher(SQLModel, table=True):
    __tablename__ = "student_teacher"
    student_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)
    teacher_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)
    position: int = Field(default=0)
