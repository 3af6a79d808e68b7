import logging
from typing import List, Optional, Tuple

from sqlmodel import Session, select

from quizboard.models import Subject, User
from quizboard.schemas.subject_schema import SubjectResponse

logger = logging.getLogger(__name__)


def get_by_name(db: Session, name: str) -> Optional[Subject]:
    statement = select(Subject).where(Subject.name == name)
    return db.exec(statement).first()


def get_or_create(db: Session, name: str, teacher_id: Optional[int], commit: bool = True) -> Tuple[Subject, bool]:
    """Return the subject with this name, creating it for the teacher on first use.

    The boolean is True when a new subject was created.
    """
    name = name.strip()
    subject = get_by_name(db, name)
    if subject:
        return subject, False
    subject = Subject(name=name, teacher_id=teacher_id)
    db.add(subject)
    if commit:
        db.commit()
        db.refresh(subject)
    else:
        db.flush()
    logger.info(f"Created subject '{name}' for teacher {teacher_id}")
    return subject, True


def to_response(db: Session, subject: Subject) -> SubjectResponse:
    teacher = db.get(User, subject.teacher_id) if subject.teacher_id else None
    return SubjectResponse(
        id=subject.id,
        name=subject.name,
        teacher_id=subject.teacher_id,
        teacher_name=teacher.username if teacher else None,
        teacher_email=teacher.email if teacher else None,
        created_at=subject.created_at,
    )


def list_all(db: Session) -> List[SubjectResponse]:
    subjects = db.exec(select(Subject).order_by(Subject.name)).all()
    return [to_response(db, subject) for subject in subjects]
