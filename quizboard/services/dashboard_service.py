from collections import OrderedDict
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from quizboard.models import User, UserRole, Subject, UserSubject, SubjectRole, Quiz, QuizAnswer
from quizboard.schemas.dashboard_schema import (
    StatsResponse, SubjectStudents, SubjectTeachers, UserRef, TeacherRef,
    SubjectDistribution, StudentSubjectsResponse,
)
from quizboard.services import user_service
from quizboard.utils.utils import round_half_up


def _count_users(db: Session, role: UserRole) -> int:
    return db.exec(select(func.count(User.id)).where(User.role == role)).one()


def stats(db: Session) -> StatsResponse:
    return StatsResponse(
        students=_count_users(db, UserRole.student),
        teachers=_count_users(db, UserRole.teacher),
        subjects=db.exec(select(func.count(Subject.id))).one(),
    )


def _group_users_by_subject(db: Session, role: SubjectRole, user_role: UserRole) -> "OrderedDict[str, List[UserRef]]":
    statement = (select(UserSubject.subject_name, User)
                 .join(User, User.id == UserSubject.user_id)
                 .where((UserSubject.role == role) & (User.role == user_role))
                 .order_by(UserSubject.subject_name, User.id))
    grouped: "OrderedDict[str, List[UserRef]]" = OrderedDict()
    for subject_name, user in db.exec(statement).all():
        grouped.setdefault(subject_name, []).append(UserRef(id=user.id, username=user.username))
    return grouped


def students_per_subject(db: Session) -> List[SubjectStudents]:
    grouped = _group_users_by_subject(db, SubjectRole.student, UserRole.student)
    return [SubjectStudents(name=name, student_count=len(users), students=users)
            for name, users in grouped.items()]


def teachers_per_subject(db: Session) -> List[SubjectTeachers]:
    grouped = _group_users_by_subject(db, SubjectRole.teacher, UserRole.teacher)
    return [SubjectTeachers(subject=name, teacher_count=len(users), teachers=users)
            for name, users in grouped.items()]


def student_subjects(db: Session, student_id: int) -> Optional[StudentSubjectsResponse]:
    """Each enrolled subject paired with the teacher chosen at the same position, plus quiz stats."""
    student = user_service.get_user_with_role(db, student_id, UserRole.student)
    if not student:
        return None

    subject_names = user_service.subject_names(db, student.id, SubjectRole.student)
    teacher_ids = user_service.teacher_ids(db, student.id)

    distribution = []
    for index, subject_name in enumerate(subject_names):
        teacher = None
        if index < len(teacher_ids):
            teacher_user = user_service.get_user_with_role(db, teacher_ids[index], UserRole.teacher)
            if teacher_user:
                teacher = TeacherRef(id=teacher_user.id, username=teacher_user.username, email=teacher_user.email)

        total_quizzes = db.exec(
            select(func.count(Quiz.id)).join(Subject, Subject.id == Quiz.subject_id)
            .where(Subject.name == subject_name)).one()
        scores = db.exec(
            select(QuizAnswer.score)
            .join(Quiz, Quiz.id == QuizAnswer.quiz_id)
            .join(Subject, Subject.id == Quiz.subject_id)
            .where((QuizAnswer.student_id == student.id) & (Subject.name == subject_name))).all()

        distribution.append(SubjectDistribution(
            subject=subject_name,
            teacher=teacher,
            completed_quizzes=len(scores),
            total_quizzes=total_quizzes,
            average_score=round_half_up(sum(scores) / len(scores)) if scores else 0,
        ))

    return StudentSubjectsResponse(
        student=UserRef(id=student.id, username=student.username),
        subjects=distribution,
    )
