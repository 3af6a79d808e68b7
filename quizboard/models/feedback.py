from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class FeedbackDirection(str, Enum):
    to_student = "to_student"
    to_teacher = "to_teacher"


class Feedback(SQLModel, table=True):
    """A feedback message between a student and a teacher.

    `author_name` is captured at send time so the message still reads correctly
    when the teacher is unknown (system feedback) or later renamed.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    teacher_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    author_name: str
    message: str
    subject: str = "General Feedback"
    direction: FeedbackDirection
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
