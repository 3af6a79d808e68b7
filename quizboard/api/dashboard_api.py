from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.schemas.dashboard_schema import (
    StatsResponse, SubjectStudents, SubjectTeachers, StudentSubjectsResponse,
)
from quizboard.services import dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    return dashboard_service.stats(db)


@router.get("/students-per-subject", response_model=List[SubjectStudents])
def students_per_subject(db: Session = Depends(get_db)):
    return dashboard_service.students_per_subject(db)


@router.get("/teachers-per-subject", response_model=List[SubjectTeachers])
def teachers_per_subject(db: Session = Depends(get_db)):
    return dashboard_service.teachers_per_subject(db)


@router.get("/student/{student_id}/subjects", response_model=StudentSubjectsResponse)
def get_student_subjects(student_id: int, db: Session = Depends(get_db)):
    result = dashboard_service.student_subjects(db, student_id)
    if not result:
        raise HTTPException(status_code=404, detail="Student not found")
    return result
