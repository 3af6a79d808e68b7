from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.models import UserRole
from quizboard.schemas.subject_schema import SubjectCreateRequest, SubjectResponse
from quizboard.schemas.user_schema import TeacherDetail
from quizboard.services import subject_service, user_service

router = APIRouter(prefix="/api/subjects", tags=["Subjects"])


@router.post("/create", response_model=SubjectResponse, status_code=201)
def create_subject(req: SubjectCreateRequest, response: Response, db: Session = Depends(get_db)):
    if not req.name or not req.name.strip() or req.teacher_id is None:
        raise HTTPException(status_code=400, detail="Name and teacher_id are required")
    if not user_service.get_user_with_role(db, req.teacher_id, UserRole.teacher):
        raise HTTPException(status_code=404, detail="Teacher not found")
    subject, created = subject_service.get_or_create(db, req.name, req.teacher_id)
    if not created:
        response.status_code = 200
    return subject_service.to_response(db, subject)


@router.get("/", response_model=List[SubjectResponse])
def list_subjects(db: Session = Depends(get_db)):
    return subject_service.list_all(db)


@router.get("/teachers/{subject_name}", response_model=List[TeacherDetail])
def list_teachers_by_subject(subject_name: str, db: Session = Depends(get_db)):
    return user_service.list_teachers_by_subject(db, subject_name)
