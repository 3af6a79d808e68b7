from typing import List

from pydantic import BaseModel


class SubjectStatSchema(BaseModel):
    subject: str
    attempts: int
    accuracy: int
    average_score: int


class TopicStatSchema(BaseModel):
    topic: str
    accuracy: int


class AnalyticsResponse(BaseModel):
    subject_stats: List[SubjectStatSchema]
    weak_subjects: List[str]
    topic_stats: List[TopicStatSchema]
    weakest_topics: List[str]
    recommended_difficulty: str
    recommendations: List[str]


class TipsRequest(BaseModel):
    weak_subjects: List[str] = []
    weakest_topics: List[str] = []


class TipsResponse(BaseModel):
    tips: List[str]
    model: str
