from dataclasses import asdict
from typing import List

from sqlmodel import Session

from quizboard.analytics import AttemptRecord, analyze
from quizboard.configs import settings
from quizboard.schemas.ai_schema import AnalyticsResponse
from quizboard.services import quiz_service
from quizboard.utils.utils import UNKNOWN


def attempt_records(db: Session, student_id: int) -> List[AttemptRecord]:
    records = []
    for answer in quiz_service.list_answers_for_student(db, student_id):
        quiz = answer.quiz
        records.append(AttemptRecord(
            subject=quiz_service.subject_label(quiz, UNKNOWN),
            title=quiz.title if quiz else "",
            score=answer.score,
            correct_answers=answer.correct_answers,
            total_questions=answer.total_questions,
        ))
    return records


def student_analytics(db: Session, student_id: int) -> AnalyticsResponse:
    quiz_service.require_student(db, student_id)
    report = analyze(attempt_records(db, student_id),
                     threshold=settings.WEAK_ACCURACY_THRESHOLD,
                     limit=settings.WEAK_LIMIT)
    return AnalyticsResponse.model_validate(asdict(report))
