from typing import Optional, List

from pydantic import BaseModel


class StatsResponse(BaseModel):
    students: int
    teachers: int
    subjects: int


class UserRef(BaseModel):
    id: int
    username: str


class TeacherRef(UserRef):
    email: str


class SubjectStudents(BaseModel):
    name: str
    student_count: int
    students: List[UserRef]


class SubjectTeachers(BaseModel):
    subject: str
    teacher_count: int
    teachers: List[UserRef]


class SubjectDistribution(BaseModel):
    subject: str
    teacher: Optional[TeacherRef]
    completed_quizzes: int
    total_quizzes: int
    average_score: int


class StudentSubjectsResponse(BaseModel):
    student: UserRef
    subjects: List[SubjectDistribution]
