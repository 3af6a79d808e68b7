from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel

from quizboard.models import FeedbackDirection


class SendFeedbackRequest(BaseModel):
    student_id: int
    teacher_id: Optional[int] = None
    message: Optional[str] = None
    subject: Optional[str] = None


class StudentToTeacherRequest(BaseModel):
    student_id: int
    teacher_id: int
    message: Optional[str] = None
    subject: Optional[str] = None
    student_name: Optional[str] = None


class CreateSampleRequest(BaseModel):
    student_id: int


class FeedbackResponse(BaseModel):
    id: int
    student_id: int
    teacher_id: Optional[int]
    author_name: str
    message: str
    subject: str
    direction: FeedbackDirection
    created_at: datetime


class SendFeedbackResponse(BaseModel):
    message: str
    feedback: FeedbackResponse


class SampleFeedbackResponse(BaseModel):
    message: str
    feedbacks: List[FeedbackResponse]
