from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field

from quizboard.schemas.quiz_schema import StudentQuizEntry


class QuizAnswerSubmitRequest(BaseModel):
    quiz_id: int
    student_id: int
    answers: Dict[str, Any] = Field(default_factory=dict)


class AnswerDetail(BaseModel):
    question_index: int
    selected_option: Optional[int]
    is_correct: bool


class SubmissionResponse(BaseModel):
    message: str
    quiz_id: int
    student_id: int
    score: int
    correct_answers: int
    total_questions: int
    answers: List[AnswerDetail]
    updated: bool


class QuizAnswerView(BaseModel):
    id: int
    quiz_id: int
    quiz_title: str
    subject: str
    student_id: int
    student_name: str
    student_email: str
    answers: List[AnswerDetail]
    score: int
    correct_answers: int
    total_questions: int
    completed_at: datetime


class QuizAnswerReview(QuizAnswerView):
    questions: List[Dict[str, Any]]


class StudentDashboard(BaseModel):
    completed: List[StudentQuizEntry]
    upcoming: List[StudentQuizEntry]
    total_completed: int
    total_upcoming: int
    average_score: int
