from datetime import date, datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, model_validator


class QuestionSchema(BaseModel):
    question_text: str = Field(min_length=1)
    options: List[str] = Field(min_length=1)
    correct_answer: int

    @model_validator(mode="after")
    def check_correct_answer(self) -> "QuestionSchema":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} is out of range for {len(self.options)} options")
        return self


class QuizCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    teacher_id: Optional[int] = None
    due_date: Optional[date] = None
    questions: List[QuestionSchema] = Field(min_length=1)


class QuizResponse(BaseModel):
    id: int
    title: str
    subject_id: Optional[int]
    subject: str
    teacher_id: Optional[int]
    teacher: str
    due_date: Optional[date]
    questions: List[Dict[str, Any]]
    created_at: datetime


class QuizSubmitRequest(BaseModel):
    student_id: int
    # question index -> selected option index; keys arrive as strings from JSON
    answers: Dict[str, Any] = Field(default_factory=dict)


class StudentQuizEntry(BaseModel):
    id: int
    title: str
    subject: str
    teacher: str
    completed: bool
    score: Optional[int] = None
    completed_at: Optional[datetime] = None
    due_date: Optional[date] = None


class ScoreRecord(BaseModel):
    quiz_id: int
    score: int
    date: datetime
    subject: str


class ScoreSummary(BaseModel):
    total_quizzes: int
    average_score: float
    highest_score: int
    lowest_score: int
    results: List[ScoreRecord]


class ResultRow(BaseModel):
    student_id: int
    student_name: str
    student_email: str
    quiz_id: int
    quiz_title: str
    subject: str
    score: int
    completed_at: datetime
    teacher_id: Optional[int]
    teacher_name: str


class RecentQuiz(BaseModel):
    id: int
    title: str
    subject: str
    created_at: datetime
    result_count: int
    avg_score: int
    status: str
