from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.schemas.quiz_answer_schema import (
    QuizAnswerSubmitRequest, SubmissionResponse, QuizAnswerView, QuizAnswerReview, StudentDashboard,
)
from quizboard.services import quiz_answer_service

router = APIRouter(prefix="/api/quiz-answer", tags=["QuizAnswer"])


@router.post("/submit", response_model=SubmissionResponse)
def submit_answers(req: QuizAnswerSubmitRequest, db: Session = Depends(get_db)):
    return quiz_answer_service.submit(db, req.quiz_id, req.student_id, req.answers)


@router.get("/student/{student_id}", response_model=List[QuizAnswerView])
def list_student_answers(student_id: int, db: Session = Depends(get_db)):
    return quiz_answer_service.list_for_student(db, student_id)


@router.get("/student/{student_id}/dashboard", response_model=StudentDashboard)
def get_student_dashboard(student_id: int, db: Session = Depends(get_db)):
    return quiz_answer_service.student_dashboard(db, student_id)


@router.get("/quiz/{quiz_id}/results", response_model=List[QuizAnswerView])
def list_quiz_results(quiz_id: int, db: Session = Depends(get_db)):
    return quiz_answer_service.list_for_quiz(db, quiz_id)


@router.get("/{quiz_id}/{student_id}", response_model=QuizAnswerReview)
def get_quiz_answer(quiz_id: int, student_id: int, db: Session = Depends(get_db)):
    review = quiz_answer_service.get_review(db, quiz_id, student_id)
    if not review:
        raise HTTPException(status_code=404, detail="Quiz answers not found")
    return review
