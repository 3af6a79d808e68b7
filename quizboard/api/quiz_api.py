from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.schemas.quiz_answer_schema import SubmissionResponse
from quizboard.schemas.quiz_schema import (
    QuizCreateRequest, QuizResponse, QuizSubmitRequest, StudentQuizEntry, ScoreSummary, ResultRow, RecentQuiz,
)
from quizboard.services import quiz_service, quiz_answer_service

router = APIRouter(prefix="/api/quiz", tags=["Quiz"])


@router.post("/create", response_model=QuizResponse, status_code=201)
def create_quiz(req: QuizCreateRequest, db: Session = Depends(get_db)):
    quiz = quiz_service.create_quiz(db, req)
    return quiz_service.to_response(quiz)


@router.get("/results/all", response_model=List[ResultRow])
def list_all_results(db: Session = Depends(get_db)):
    return quiz_service.result_rows(db)


@router.get("/results/teacher/{teacher_id}", response_model=List[ResultRow])
def list_teacher_results(teacher_id: int, db: Session = Depends(get_db)):
    return quiz_service.result_rows(db, teacher_id=teacher_id)


@router.get("/teacher/{teacher_id}/recent", response_model=List[RecentQuiz])
def list_recent_quizzes(teacher_id: int, db: Session = Depends(get_db)):
    return quiz_service.recent_quizzes(db, teacher_id)


@router.get("/student/{student_id}", response_model=List[StudentQuizEntry])
def list_student_quizzes(student_id: int, db: Session = Depends(get_db)):
    return quiz_service.student_quizzes(db, student_id)


@router.get("/student/{student_id}/results", response_model=List[StudentQuizEntry])
def list_student_results(student_id: int, db: Session = Depends(get_db)):
    return quiz_service.student_results(db, student_id)


@router.get("/student/{student_id}/analytics", response_model=ScoreSummary)
def get_student_score_summary(student_id: int, db: Session = Depends(get_db)):
    return quiz_service.score_summary(db, student_id)


@router.get("/{quiz_id}", response_model=QuizResponse)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    quiz = quiz_service.get_quiz(db, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz_service.to_response(quiz)


@router.post("/{quiz_id}/submit", response_model=SubmissionResponse)
def submit_quiz(quiz_id: int, req: QuizSubmitRequest, db: Session = Depends(get_db)):
    return quiz_answer_service.submit(db, quiz_id, req.student_id, req.answers)
