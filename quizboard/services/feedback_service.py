import logging
from datetime import datetime, timedelta, UTC
from typing import List, Optional

from fastapi import HTTPException
from sqlmodel import Session, select

from quizboard.models import Feedback, FeedbackDirection, UserRole
from quizboard.services import user_service
from quizboard.utils.utils import SYSTEM_TEACHER, GENERAL_FEEDBACK

logger = logging.getLogger(__name__)

SAMPLE_FEEDBACK = [
    ("Prof. ADBMS", "ADBMS", 2,
     "Great progress in database concepts! Your understanding of normalization is excellent. "
     "Keep practicing complex queries."),
    ("Prof. STQA", "STQA", 1,
     "Your test case design skills are improving. Focus more on edge cases and boundary value analysis."),
    ("Prof. DevOps", "DevOps", 0,
     "Excellent work on CI/CD pipeline setup! Your Docker containerization approach is very clean."),
]


def _clean_message(message: Optional[str]) -> str:
    message = (message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Feedback message cannot be empty")
    return message


def _save(db: Session, feedback: Feedback) -> Feedback:
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


def send_to_student(db: Session, student_id: int, teacher_id: Optional[int],
                    message: Optional[str], subject: Optional[str]) -> Feedback:
    message = _clean_message(message)
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    teacher = user_service.get_user_with_role(db, teacher_id, UserRole.teacher) if teacher_id else None
    if teacher_id and not teacher:
        logger.warning(f"Feedback for student {student_id} names unknown teacher {teacher_id}, sending as system")

    feedback = _save(db, Feedback(
        student_id=student.id,
        teacher_id=teacher.id if teacher else None,
        author_name=teacher.username if teacher else SYSTEM_TEACHER,
        message=message,
        subject=subject or GENERAL_FEEDBACK,
        direction=FeedbackDirection.to_student,
    ))
    logger.info(f"Feedback {feedback.id} sent to student {student.id} by {feedback.author_name}")
    return feedback


def send_to_teacher(db: Session, student_id: int, teacher_id: int, message: Optional[str],
                    subject: Optional[str], student_name: Optional[str] = None) -> Feedback:
    message = _clean_message(message)
    teacher = user_service.get_user_with_role(db, teacher_id, UserRole.teacher)
    if not teacher:
        raise HTTPException(status_code=404, detail="Teacher not found")
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    feedback = _save(db, Feedback(
        student_id=student.id,
        teacher_id=teacher.id,
        author_name=student_name or student.username,
        message=message,
        subject=subject or GENERAL_FEEDBACK,
        direction=FeedbackDirection.to_teacher,
    ))
    logger.info(f"Feedback {feedback.id} sent to teacher {teacher.id} by student {student.id}")
    return feedback


def list_for_student(db: Session, student_id: int) -> Optional[List[Feedback]]:
    if not user_service.get_user_with_role(db, student_id, UserRole.student):
        return None
    statement = (select(Feedback)
                 .where((Feedback.student_id == student_id)
                        & (Feedback.direction == FeedbackDirection.to_student))
                 .order_by(Feedback.created_at.desc(), Feedback.id.desc()))
    return db.exec(statement).all()


def list_for_teacher(db: Session, teacher_id: int) -> Optional[List[Feedback]]:
    if not user_service.get_user_with_role(db, teacher_id, UserRole.teacher):
        return None
    statement = (select(Feedback)
                 .where((Feedback.teacher_id == teacher_id)
                        & (Feedback.direction == FeedbackDirection.to_teacher))
                 .order_by(Feedback.created_at.desc(), Feedback.id.desc()))
    return [f for f in db.exec(statement).all() if f.message and f.message.strip()]


def create_samples(db: Session, student_id: int) -> List[Feedback]:
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    now = datetime.now(UTC)
    samples = [
        Feedback(student_id=student.id, teacher_id=None, author_name=author, message=message,
                 subject=subject, direction=FeedbackDirection.to_student,
                 created_at=now - timedelta(days=days_ago))
        for author, subject, days_ago, message in SAMPLE_FEEDBACK
    ]
    db.add_all(samples)
    db.commit()
    for sample in samples:
        db.refresh(sample)
    return samples
