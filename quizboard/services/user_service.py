import logging
from typing import Optional, List, Dict, Tuple

from fastapi import HTTPException
from sqlalchemy import func
from sqlmodel import Session, select

from quizboard.auth.assignment_check import claims_match_assignment
from quizboard.auth.auth_handler import get_password_hash, authenticate_user, create_access_token
from quizboard.models import User, UserRole, UserSubject, StudentTeacher, SubjectRole, QuizAnswer
from quizboard.schemas.user_schema import (
    SignupRequest, LoginRequest, UserDataRequest, StudentUpdateRequest,
    UserResponse, UserDataResponse, TeacherDetail, StudentSummary,
)
from quizboard.utils.utils import round_half_up, NOT_ASSIGNED

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _unique(values) -> list:
    return list(dict.fromkeys(v for v in values if v not in (None, "")))


def subject_names(db: Session, user_id: int, role: SubjectRole) -> List[str]:
    statement = (select(UserSubject)
                 .where((UserSubject.user_id == user_id) & (UserSubject.role == role))
                 .order_by(UserSubject.position))
    return [link.subject_name for link in db.exec(statement).all()]


def teacher_ids(db: Session, student_id: int) -> List[int]:
    statement = (select(StudentTeacher)
                 .where(StudentTeacher.student_id == student_id)
                 .order_by(StudentTeacher.position))
    return [link.teacher_id for link in db.exec(statement).all()]


def set_subjects(db: Session, user_id: int, names: List[str], role: SubjectRole) -> None:
    for link in db.exec(select(UserSubject).where(
            (UserSubject.user_id == user_id) & (UserSubject.role == role))).all():
        db.delete(link)
    db.flush()
    for position, name in enumerate(_unique(names)):
        db.add(UserSubject(user_id=user_id, subject_name=name, role=role, position=position))


def set_teachers(db: Session, student_id: int, ids: List[int]) -> None:
    for link in db.exec(select(StudentTeacher).where(StudentTeacher.student_id == student_id)).all():
        db.delete(link)
    db.flush()
    for position, teacher_id in enumerate(_unique(ids)):
        db.add(StudentTeacher(student_id=student_id, teacher_id=teacher_id, position=position))


def to_response(db: Session, user: User) -> UserResponse:
    response = UserResponse(id=user.id, username=user.username, email=user.email, role=user.role)
    if user.role == UserRole.student:
        response.subjects = subject_names(db, user.id, SubjectRole.student)
        response.teacher_ids = teacher_ids(db, user.id)
    elif user.role == UserRole.teacher:
        response.teacher_subjects = subject_names(db, user.id, SubjectRole.teacher)
    return response


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == normalize_email(email))
    return db.exec(statement).first()


def get_user_with_role(db: Session, user_id: int, role: UserRole) -> Optional[User]:
    user = db.get(User, user_id)
    if not user or user.role != role:
        return None
    return user


def create_user(db: Session, user_req: SignupRequest) -> UserResponse:
    if get_user_by_email(db, user_req.email):
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        username=user_req.username.strip(),
        email=normalize_email(user_req.email),
        password=get_password_hash(user_req.password),
        role=user_req.role,
    )
    db.add(user)
    db.flush()
    if user.role == UserRole.student:
        set_subjects(db, user.id, user_req.subjects, SubjectRole.student)
        set_teachers(db, user.id, user_req.teacher_ids)
    elif user.role == UserRole.teacher:
        set_subjects(db, user.id, user_req.teacher_subjects, SubjectRole.teacher)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered {user.role.value} {user.id} ({user.email})")
    return to_response(db, user)


def login(db: Session, login_req: LoginRequest) -> Tuple[UserResponse, str]:
    user = authenticate_user(db, normalize_email(login_req.email), login_req.password)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if user.role != login_req.role:
        raise HTTPException(status_code=400, detail="Role mismatch")

    profile = to_response(db, user)
    if not claims_match_assignment(
            user.role,
            stored_subjects=profile.subjects,
            stored_teacher_ids=profile.teacher_ids,
            stored_teacher_subjects=profile.teacher_subjects,
            claimed_subjects=login_req.subjects,
            claimed_teacher_ids=login_req.teacher_ids,
            claimed_teacher_subjects=login_req.teacher_subjects):
        logger.info(f"Login claims for user {user.id} do not match the stored assignment")
        raise HTTPException(status_code=400, detail="Selected subjects or teachers don't match your registration")

    return profile, create_access_token(user)


def get_user_data(db: Session, req: UserDataRequest) -> UserDataResponse:
    if not req.username or not req.role:
        raise HTTPException(status_code=400, detail="Username and role are required")
    if req.role == UserRole.student and not req.email:
        raise HTTPException(status_code=400, detail="Email is required for student accounts")

    statement = select(User).where(
        (func.lower(User.username) == req.username.strip().lower()) & (User.role == req.role))
    if req.role == UserRole.student:
        statement = statement.where(User.email == normalize_email(req.email))
    user = db.exec(statement).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found with provided credentials")

    response = UserDataResponse(**to_response(db, user).model_dump())
    if user.role == UserRole.student and response.teacher_ids:
        teachers = db.exec(select(User).where(
            User.id.in_(response.teacher_ids) & (User.role == UserRole.teacher))).all()
        response.teacher_details = [
            TeacherDetail(id=t.id, username=t.username, email=t.email,
                          teacher_subjects=subject_names(db, t.id, SubjectRole.teacher))
            for t in teachers
        ]
    return response


def verify_email(db: Session, email: Optional[str]) -> None:
    if not email:
        raise HTTPException(status_code=400, detail="Email required")
    if not get_user_by_email(db, email):
        raise HTTPException(status_code=404, detail="User not found")


def reset_password(db: Session, email: Optional[str], new_password: Optional[str]) -> None:
    if not email or not new_password:
        raise HTTPException(status_code=400, detail="Email and new password required")
    user = get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user.password = get_password_hash(new_password)
    db.add(user)
    db.commit()
    logger.info(f"Password reset for user {user.id}")


def update_student(db: Session, student_id: int, req: StudentUpdateRequest) -> Optional[UserResponse]:
    student = get_user_with_role(db, student_id, UserRole.student)
    if not student:
        return None
    if req.subjects is not None:
        set_subjects(db, student.id, req.subjects, SubjectRole.student)
    if req.teacher_ids is not None:
        set_teachers(db, student.id, req.teacher_ids)
    db.commit()
    return to_response(db, student)


def _score_stats_by_student(db: Session) -> Dict[int, Tuple[int, float]]:
    statement = (select(QuizAnswer.student_id, func.count(QuizAnswer.id), func.avg(QuizAnswer.score))
                 .group_by(QuizAnswer.student_id))
    return {student_id: (count, float(avg or 0)) for student_id, count, avg in db.exec(statement).all()}


def list_students(db: Session, teacher_id: Optional[int] = None) -> List[StudentSummary]:
    statement = select(User).where(User.role == UserRole.student)
    if teacher_id is not None:
        statement = statement.join(StudentTeacher, StudentTeacher.student_id == User.id).where(
            StudentTeacher.teacher_id == teacher_id)
    students = db.exec(statement.order_by(User.created_at.desc(), User.id.desc())).all()

    stats = _score_stats_by_student(db)
    summaries = []
    for student in students:
        completed, average = stats.get(student.id, (0, 0))
        summaries.append(StudentSummary(
            id=student.id,
            username=student.username,
            email=student.email,
            subjects=subject_names(db, student.id, SubjectRole.student) or [NOT_ASSIGNED],
            teacher_ids=teacher_ids(db, student.id),
            created_at=student.created_at,
            completed_quizzes=completed,
            average_score=round_half_up(average),
        ))
    return summaries


def list_teachers_by_subject(db: Session, subject_name: str) -> List[TeacherDetail]:
    statement = (select(User)
                 .join(UserSubject, UserSubject.user_id == User.id)
                 .where((User.role == UserRole.teacher)
                        & (UserSubject.role == SubjectRole.teacher)
                        & (UserSubject.subject_name == subject_name)))
    return [TeacherDetail(id=t.id, username=t.username, email=t.email,
                          teacher_subjects=subject_names(db, t.id, SubjectRole.teacher))
            for t in db.exec(statement).all()]
