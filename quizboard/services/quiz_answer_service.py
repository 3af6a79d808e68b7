import logging
from datetime import datetime, timedelta, UTC
from typing import List, Optional, Mapping, Any

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from quizboard.configs import settings
from quizboard.models import QuizAnswer, Quiz, User, UserRole
from quizboard.schemas.quiz_answer_schema import (
    SubmissionResponse, QuizAnswerView, QuizAnswerReview, StudentDashboard,
)
from quizboard.services import quiz_service, user_service
from quizboard.services.scoring import score_submission
from quizboard.utils.utils import round_half_up, UNKNOWN, UNKNOWN_QUIZ

logger = logging.getLogger(__name__)


def get_by_quiz_student(db: Session, quiz_id: int, student_id: int) -> Optional[QuizAnswer]:
    statement = select(QuizAnswer).where(
        (QuizAnswer.quiz_id == quiz_id) & (QuizAnswer.student_id == student_id)
    )
    return db.exec(statement).first()


def _apply(answer: QuizAnswer, scored) -> None:
    answer.answers = scored.answers
    answer.score = scored.score
    answer.correct_answers = scored.correct_answers
    answer.total_questions = scored.total_questions


def submit(db: Session, quiz_id: int, student_id: int, answers: Optional[Mapping[str, Any]]) -> SubmissionResponse:
    """Score a submission and store it, replacing any earlier one for the same quiz and student."""
    quiz = db.get(Quiz, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    if not user_service.get_user_with_role(db, student_id, UserRole.student):
        raise HTTPException(status_code=404, detail="Student not found")

    scored = score_submission(quiz.questions or [], answers)
    now = datetime.now(UTC)

    existing = get_by_quiz_student(db, quiz_id, student_id)
    updated = existing is not None
    if existing:
        _apply(existing, scored)
        existing.completed_at = now
        existing.updated_at = now
        db.add(existing)
        db.commit()
    else:
        record = QuizAnswer(quiz_id=quiz_id, student_id=student_id, completed_at=now)
        _apply(record, scored)
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent submission for the same pair won the insert; overwrite it instead
            db.rollback()
            existing = get_by_quiz_student(db, quiz_id, student_id)
            if existing is None:
                raise
            _apply(existing, scored)
            existing.completed_at = now
            existing.updated_at = now
            db.add(existing)
            db.commit()
            updated = True

    logger.info(f"{'Updated' if updated else 'Created'} answer for quiz {quiz_id} by student {student_id}: "
                f"{scored.correct_answers}/{scored.total_questions} ({scored.score}%)")
    return SubmissionResponse(
        message="Quiz answers submitted successfully",
        quiz_id=quiz_id,
        student_id=student_id,
        score=scored.score,
        correct_answers=scored.correct_answers,
        total_questions=scored.total_questions,
        answers=scored.answers,
        updated=updated,
    )


def to_view(answer: QuizAnswer) -> QuizAnswerView:
    quiz = answer.quiz
    student: Optional[User] = answer.student
    return QuizAnswerView(
        id=answer.id,
        quiz_id=answer.quiz_id,
        quiz_title=quiz.title if quiz else UNKNOWN_QUIZ,
        subject=quiz_service.subject_label(quiz),
        student_id=answer.student_id,
        student_name=student.username if student else UNKNOWN,
        student_email=student.email if student else "",
        answers=answer.answers or [],
        score=answer.score,
        correct_answers=answer.correct_answers,
        total_questions=answer.total_questions,
        completed_at=answer.completed_at,
    )


def get_review(db: Session, quiz_id: int, student_id: int) -> Optional[QuizAnswerReview]:
    answer = get_by_quiz_student(db, quiz_id, student_id)
    if not answer:
        return None
    view = to_view(answer)
    questions = answer.quiz.questions if answer.quiz else []
    return QuizAnswerReview(**view.model_dump(), questions=questions or [])


def list_for_student(db: Session, student_id: int) -> List[QuizAnswerView]:
    quiz_service.require_student(db, student_id)
    return [to_view(a) for a in quiz_service.list_answers_for_student(db, student_id)]


def list_for_quiz(db: Session, quiz_id: int) -> List[QuizAnswerView]:
    statement = (select(QuizAnswer)
                 .where(QuizAnswer.quiz_id == quiz_id)
                 .order_by(QuizAnswer.completed_at.desc(), QuizAnswer.id.desc()))
    return [to_view(a) for a in db.exec(statement).all()]


def student_dashboard(db: Session, student_id: int) -> StudentDashboard:
    quiz_service.require_student(db, student_id)

    answers = [a for a in quiz_service.list_answers_for_student(db, student_id) if a.quiz is not None]
    completed = [quiz_service.completed_entry(a) for a in answers]

    default_due = (datetime.now(UTC) + timedelta(days=settings.DEFAULT_DUE_DAYS)).date()
    upcoming = [quiz_service.upcoming_entry(q, default_due)
                for q in quiz_service.upcoming_quizzes(db, student_id, {a.quiz_id for a in answers})]

    logger.debug(f"Dashboard for student {student_id}: {len(completed)} completed, {len(upcoming)} upcoming")
    return StudentDashboard(
        completed=completed,
        upcoming=upcoming,
        total_completed=len(completed),
        total_upcoming=len(upcoming),
        average_score=round_half_up(sum(c.score for c in completed) / len(completed)) if completed else 0,
    )
