import logging
from datetime import date, datetime, UTC
from typing import List, Optional, Iterable, Set

from fastapi import HTTPException
from sqlmodel import Session, select

from quizboard.configs import settings
from quizboard.models import Quiz, QuizAnswer, Subject, User, UserRole, SubjectRole
from quizboard.schemas.quiz_schema import (
    QuizCreateRequest, QuizResponse, StudentQuizEntry, ScoreSummary, ScoreRecord, ResultRow, RecentQuiz,
)
from quizboard.services import subject_service, user_service
from quizboard.utils.utils import round_half_up, UNKNOWN_SUBJECT, UNKNOWN_TEACHER, UNKNOWN_QUIZ

logger = logging.getLogger(__name__)


def subject_label(quiz: Optional[Quiz], fallback: str = UNKNOWN_SUBJECT) -> str:
    if quiz is not None and quiz.subject is not None:
        return quiz.subject.name
    return fallback


def teacher_label(quiz: Optional[Quiz], fallback: str = UNKNOWN_TEACHER) -> str:
    if quiz is not None and quiz.teacher is not None:
        return quiz.teacher.username
    return fallback


def create_quiz(db: Session, req: QuizCreateRequest) -> Quiz:
    if req.teacher_id is not None and not user_service.get_user_with_role(db, req.teacher_id, UserRole.teacher):
        raise HTTPException(status_code=404, detail="Teacher not found")

    subject_id = None
    if req.subject_id is not None:
        if not db.get(Subject, req.subject_id):
            raise HTTPException(status_code=404, detail="Subject not found")
        subject_id = req.subject_id
    elif req.subject_name and req.subject_name.strip():
        subject, _ = subject_service.get_or_create(db, req.subject_name, req.teacher_id, commit=False)
        subject_id = subject.id

    quiz = Quiz(
        title=req.title.strip(),
        subject_id=subject_id,
        teacher_id=req.teacher_id,
        due_date=req.due_date,
        questions=[q.model_dump() for q in req.questions],
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    logger.info(f"Quiz {quiz.id} '{quiz.title}' created with {len(quiz.questions)} questions")
    return quiz


def get_quiz(db: Session, quiz_id: int) -> Optional[Quiz]:
    return db.get(Quiz, quiz_id)


def to_response(quiz: Quiz) -> QuizResponse:
    return QuizResponse(
        id=quiz.id,
        title=quiz.title,
        subject_id=quiz.subject_id,
        subject=subject_label(quiz),
        teacher_id=quiz.teacher_id,
        teacher=teacher_label(quiz),
        due_date=quiz.due_date,
        questions=quiz.questions or [],
        created_at=quiz.created_at,
    )


def is_upcoming(quiz: Quiz, completed_quiz_ids: Set[int], student_subjects: Iterable[str],
                student_teacher_ids: Iterable[int], today: Optional[date] = None) -> bool:
    """Single policy for which quizzes a student still has to take.

    A quiz is upcoming when it was not submitted, is not past its due date, and
    belongs to one of the student's subjects or teachers. A student with no
    assignment at all sees every open quiz.
    """
    if quiz.id in completed_quiz_ids:
        return False
    today = today or datetime.now(UTC).date()
    if quiz.due_date is not None and quiz.due_date < today:
        return False

    student_subjects = set(student_subjects)
    student_teacher_ids = set(student_teacher_ids)
    if not student_subjects and not student_teacher_ids:
        return True
    in_subject = quiz.subject is not None and quiz.subject.name in student_subjects
    in_teacher = quiz.teacher_id is not None and quiz.teacher_id in student_teacher_ids
    return in_subject or in_teacher


def require_student(db: Session, student_id: int) -> User:
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


def list_answers_for_student(db: Session, student_id: int) -> List[QuizAnswer]:
    statement = (select(QuizAnswer)
                 .where(QuizAnswer.student_id == student_id)
                 .order_by(QuizAnswer.completed_at.desc(), QuizAnswer.id.desc()))
    return db.exec(statement).all()


def upcoming_quizzes(db: Session, student_id: int, completed_quiz_ids: Optional[Set[int]] = None) -> List[Quiz]:
    student = require_student(db, student_id)
    if completed_quiz_ids is None:
        completed_quiz_ids = {a.quiz_id for a in list_answers_for_student(db, student.id)}
    subjects = user_service.subject_names(db, student.id, SubjectRole.student)
    teachers = user_service.teacher_ids(db, student.id)
    quizzes = db.exec(select(Quiz).order_by(Quiz.due_date, Quiz.id)).all()
    return [q for q in quizzes if is_upcoming(q, completed_quiz_ids, subjects, teachers)]


def completed_entry(answer: QuizAnswer) -> StudentQuizEntry:
    quiz = answer.quiz
    return StudentQuizEntry(
        id=answer.quiz_id,
        title=quiz.title if quiz else UNKNOWN_QUIZ,
        subject=subject_label(quiz),
        teacher=teacher_label(quiz),
        completed=True,
        score=answer.score,
        completed_at=answer.completed_at,
    )


def upcoming_entry(quiz: Quiz, default_due: Optional[date] = None) -> StudentQuizEntry:
    return StudentQuizEntry(
        id=quiz.id,
        title=quiz.title,
        subject=subject_label(quiz),
        teacher=teacher_label(quiz),
        completed=False,
        due_date=quiz.due_date or default_due,
    )


def student_quizzes(db: Session, student_id: int) -> List[StudentQuizEntry]:
    return [upcoming_entry(q) for q in upcoming_quizzes(db, student_id)]


def student_results(db: Session, student_id: int) -> List[StudentQuizEntry]:
    require_student(db, student_id)
    answers = list_answers_for_student(db, student_id)
    completed = [completed_entry(a) for a in answers]
    upcoming = [upcoming_entry(q) for q in upcoming_quizzes(db, student_id, {a.quiz_id for a in answers})]
    return completed + upcoming


def score_summary(db: Session, student_id: int) -> ScoreSummary:
    require_student(db, student_id)
    answers = sorted(list_answers_for_student(db, student_id), key=lambda a: a.completed_at)
    scores = [a.score for a in answers]
    return ScoreSummary(
        total_quizzes=len(scores),
        average_score=round_half_up(100 * sum(scores) / len(scores)) / 100 if scores else 0,
        highest_score=max(scores) if scores else 0,
        lowest_score=min(scores) if scores else 0,
        results=[ScoreRecord(quiz_id=a.quiz_id, score=a.score, date=a.completed_at, subject=subject_label(a.quiz))
                 for a in answers],
    )


def result_rows(db: Session, teacher_id: Optional[int] = None) -> List[ResultRow]:
    """One row per submission, newest first. Submissions whose student no longer exists are skipped."""
    statement = select(QuizAnswer).join(Quiz, Quiz.id == QuizAnswer.quiz_id)
    if teacher_id is not None:
        statement = statement.where(Quiz.teacher_id == teacher_id)
    statement = statement.order_by(QuizAnswer.completed_at.desc(), QuizAnswer.id.desc())

    rows = []
    for answer in db.exec(statement).all():
        student = answer.student
        if student is None:
            logger.warning(f"Quiz answer {answer.id} references missing student {answer.student_id}")
            continue
        quiz = answer.quiz
        rows.append(ResultRow(
            student_id=student.id,
            student_name=student.username,
            student_email=student.email,
            quiz_id=quiz.id,
            quiz_title=quiz.title,
            subject=subject_label(quiz),
            score=answer.score,
            completed_at=answer.completed_at,
            teacher_id=quiz.teacher_id,
            teacher_name=teacher_label(quiz),
        ))
    return rows


def recent_quizzes(db: Session, teacher_id: int, limit: Optional[int] = None) -> List[RecentQuiz]:
    limit = limit or settings.RECENT_QUIZ_LIMIT
    statement = (select(Quiz)
                 .where(Quiz.teacher_id == teacher_id)
                 .order_by(Quiz.created_at.desc(), Quiz.id.desc())
                 .limit(limit))
    recent = []
    for quiz in db.exec(statement).all():
        scores = db.exec(select(QuizAnswer.score).where(QuizAnswer.quiz_id == quiz.id)).all()
        recent.append(RecentQuiz(
            id=quiz.id,
            title=quiz.title,
            subject=subject_label(quiz),
            created_at=quiz.created_at,
            result_count=len(scores),
            avg_score=round_half_up(sum(scores) / len(scores)) if scores else 0,
            status="completed" if scores else "pending",
        ))
    return recent
