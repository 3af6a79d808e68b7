from datetime import datetime, UTC
from typing import Optional, List, Dict, Any

from sqlalchemy import Column, UniqueConstraint
from sqlmodel import SQLModel, Field, JSON, Relationship

from quizboard.models.quiz import Quiz
from quizboard.models.user import User


class QuizAnswer(SQLModel, table=True):
    """The authoritative record of one student's submission to one quiz."""
    __tablename__ = "quiz_answer"
    __table_args__ = (UniqueConstraint("quiz_id", "student_id", name="uq_quiz_answer_quiz_student"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    quiz_id: int = Field(foreign_key="quiz.id", index=True)
    student_id: int = Field(foreign_key="user.id", index=True)
    # [{"question_index": int, "selected_option": int | None, "is_correct": bool}, ...]
    answers: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    score: int = 0
    total_questions: int = 0
    correct_answers: int = 0
    completed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: Optional[datetime] = None

    quiz: Optional[Quiz] = Relationship()
    student: Optional[User] = Relationship()
