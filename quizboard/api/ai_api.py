import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session

from quizboard.configs.database import get_db
from quizboard.schemas.ai_schema import AnalyticsResponse, TipsRequest, TipsResponse
from quizboard.services import analytics_service
from quizboard.tips import TipsProvider, HeuristicTipsProvider, get_tips_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.get("/student/{student_id}/analytics", response_model=AnalyticsResponse)
def get_student_analytics(student_id: int, db: Session = Depends(get_db)):
    return analytics_service.student_analytics(db, student_id)


@router.post("/tips", response_model=TipsResponse)
def get_study_tips(req: TipsRequest, provider: TipsProvider = Depends(get_tips_provider)):
    try:
        result = provider.get_tips(req.weak_subjects, req.weakest_topics)
    except Exception as e:
        logger.error(f"Tips provider failed: {e}", exc_info=True)
        result = HeuristicTipsProvider().get_tips(req.weak_subjects, req.weakest_topics)
    return TipsResponse(tips=result.tips, model=result.model)
