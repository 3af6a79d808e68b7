from typing import List

from fastapi import Depends, HTTPException, APIRouter
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.models import UserRole
from quizboard.schemas.user_schema import (
    SignupRequest, SignupResponse, LoginRequest, LoginResponse, UserDataRequest, UserDataResponse,
    VerifyEmailRequest, ForgotPasswordRequest, StudentUpdateRequest, UserResponse, StudentSummary,
    MessageResponse,
)
from quizboard.services import user_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(user_req: SignupRequest, db: Session = Depends(get_db)):
    user = user_service.create_user(db, user_req)
    return SignupResponse(message="User registered successfully", user=user)


@router.post("/login", response_model=LoginResponse)
def login(login_req: LoginRequest, db: Session = Depends(get_db)):
    user, access_token = user_service.login(db, login_req)
    return LoginResponse(message="Login successful", user=user, access_token=access_token)


@router.post("/getUserData", response_model=UserDataResponse)
def get_user_data(req: UserDataRequest, db: Session = Depends(get_db)):
    return user_service.get_user_data(db, req)


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(req: VerifyEmailRequest, db: Session = Depends(get_db)):
    user_service.verify_email(db, req.email)
    return MessageResponse(message="Email verified")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(req: ForgotPasswordRequest, db: Session = Depends(get_db)):
    user_service.reset_password(db, req.email, req.new_password)
    return MessageResponse(message="Password reset successfully")


@router.get("/teacher/{teacher_id}", response_model=UserResponse)
def get_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = user_service.get_user_with_role(db, teacher_id, UserRole.teacher)
    if not teacher:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return user_service.to_response(db, teacher)


@router.get("/student/{student_id}", response_model=UserResponse)
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return user_service.to_response(db, student)


@router.put("/student/{student_id}", response_model=UserResponse)
def update_student(student_id: int, req: StudentUpdateRequest, db: Session = Depends(get_db)):
    student = user_service.update_student(db, student_id, req)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("/students", response_model=List[StudentSummary])
def list_students(db: Session = Depends(get_db)):
    return user_service.list_students(db)


@router.get("/students/teacher/{teacher_id}", response_model=List[StudentSummary])
def list_students_by_teacher(teacher_id: int, db: Session = Depends(get_db)):
    return user_service.list_students(db, teacher_id=teacher_id)
