from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from quizboard.models import UserRole


class SignupRequest(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: UserRole
    subjects: List[str] = []
    teacher_ids: List[int] = []
    teacher_subjects: List[str] = []


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str
    role: UserRole
    # Optional claims compared against the stored assignment
    subjects: List[str] = []
    teacher_ids: List[int] = []
    teacher_subjects: List[str] = []


class UserDataRequest(BaseModel):
    username: Optional[str] = None
    role: Optional[UserRole] = None
    email: Optional[str] = None


class VerifyEmailRequest(BaseModel):
    email: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None
    new_password: Optional[str] = None


class StudentUpdateRequest(BaseModel):
    subjects: Optional[List[str]] = None
    teacher_ids: Optional[List[int]] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    subjects: List[str] = []
    teacher_ids: List[int] = []
    teacher_subjects: List[str] = []


class TeacherDetail(BaseModel):
    id: int
    username: str
    email: str
    teacher_subjects: List[str] = []


class UserDataResponse(UserResponse):
    teacher_details: List[TeacherDetail] = []


class LoginResponse(BaseModel):
    message: str
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class SignupResponse(BaseModel):
    message: str
    user: UserResponse


class StudentSummary(BaseModel):
    id: int
    username: str
    email: str
    subjects: List[str]
    teacher_ids: List[int]
    created_at: datetime
    completed_quizzes: int = 0
    average_score: int = 0


class MessageResponse(BaseModel):
    message: str
