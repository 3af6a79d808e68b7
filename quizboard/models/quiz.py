from datetime import datetime, date, UTC
from typing import Optional, List, Dict, Any

from sqlalchemy import Column
from sqlmodel import SQLModel, Field, JSON, Relationship

from quizboard.models.subject import Subject
from quizboard.models.user import User


class Quiz(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    subject_id: Optional[int] = Field(default=None, foreign_key="subject.id")
    teacher_id: Optional[int] = Field(default=None, foreign_key="user.id")
    due_date: Optional[date] = None
    # [{"question_text": str, "options": [str], "correct_answer": int}, ...]
    questions: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    subject: Optional[Subject] = Relationship()
    teacher: Optional[User] = Relationship()
