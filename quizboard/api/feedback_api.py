from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.schemas.feedback_schema import (
    SendFeedbackRequest, StudentToTeacherRequest, CreateSampleRequest,
    FeedbackResponse, SendFeedbackResponse, SampleFeedbackResponse,
)
from quizboard.services import feedback_service

router = APIRouter(prefix="/api/feedback", tags=["Feedback"])


@router.post("/send", response_model=SendFeedbackResponse, status_code=201)
def send_feedback(req: SendFeedbackRequest, db: Session = Depends(get_db)):
    feedback = feedback_service.send_to_student(db, req.student_id, req.teacher_id, req.message, req.subject)
    return SendFeedbackResponse(message="Feedback sent successfully",
                                feedback=FeedbackResponse.model_validate(feedback.model_dump()))


@router.get("/student/{student_id}", response_model=List[FeedbackResponse])
def list_student_feedback(student_id: int, db: Session = Depends(get_db)):
    feedback = feedback_service.list_for_student(db, student_id)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return [f.model_dump() for f in feedback]


@router.post("/student-to-teacher", response_model=SendFeedbackResponse, status_code=201)
def send_feedback_to_teacher(req: StudentToTeacherRequest, db: Session = Depends(get_db)):
    feedback = feedback_service.send_to_teacher(db, req.student_id, req.teacher_id, req.message,
                                                req.subject, req.student_name)
    return SendFeedbackResponse(message="Feedback sent to teacher successfully",
                                feedback=FeedbackResponse.model_validate(feedback.model_dump()))


@router.get("/teacher/{teacher_id}", response_model=List[FeedbackResponse])
def list_teacher_feedback(teacher_id: int, db: Session = Depends(get_db)):
    feedback = feedback_service.list_for_teacher(db, teacher_id)
    if feedback is None:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return [f.model_dump() for f in feedback]


@router.post("/create-sample", response_model=SampleFeedbackResponse, status_code=201)
def create_sample_feedback(req: CreateSampleRequest, db: Session = Depends(get_db)):
    samples = feedback_service.create_samples(db, req.student_id)
    return SampleFeedbackResponse(message="Sample feedback created successfully",
                                  feedbacks=[FeedbackResponse.model_validate(s.model_dump()) for s in samples])
