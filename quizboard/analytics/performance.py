"""
Subject and topic performance aggregation.

Everything here is a pure function over records that were already fetched
from the store. Missing or malformed numbers count as zero and no record is
rejected, so a half-broken submission history still produces a report.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable, List, Dict, Any

from quizboard.utils.utils import round_half_up, as_number, UNKNOWN

DEFAULT_WEAK_THRESHOLD = 60
DEFAULT_WEAK_LIMIT = 3
DEFAULT_DIFFICULTY = "medium"
GENERAL_TOPIC = "General"


@dataclass
class AttemptRecord:
    """One completed quiz submission as seen by the aggregator."""
    subject: str
    score: Any = 0
    correct_answers: Any = 0
    total_questions: Any = 0
    title: str = ""


@dataclass
class SubjectStat:
    subject: str
    attempts: int
    accuracy: int
    average_score: int


@dataclass
class TopicStat:
    topic: str
    accuracy: int


@dataclass
class PerformanceReport:
    subject_stats: List[SubjectStat]
    weak_subjects: List[str]
    topic_stats: List[TopicStat]
    weakest_topics: List[str]
    recommended_difficulty: str
    recommendations: List[str]


def accuracy(correct: float, total: float) -> int:
    """Percentage of correct answers, 0 when there were no questions."""
    if total <= 0:
        return 0
    return round_half_up(100 * correct / total)


def group_by_subject(records: Iterable[AttemptRecord]) -> Dict[str, List[AttemptRecord]]:
    grouped: Dict[str, List[AttemptRecord]] = OrderedDict()
    for record in records:
        grouped.setdefault(record.subject or UNKNOWN, []).append(record)
    return grouped


def compute_subject_stats(records_by_subject: Dict[str, List[AttemptRecord]]) -> List[SubjectStat]:
    """Per-subject attempts, accuracy and average score, weakest subject first.

    The sort is stable, so subjects with equal accuracy keep their input order.
    """
    stats = []
    for subject, records in records_by_subject.items():
        total = sum(as_number(r.total_questions) for r in records)
        correct = sum(as_number(r.correct_answers) for r in records)
        average_score = (round_half_up(sum(as_number(r.score) for r in records) / len(records))
                         if records else 0)
        stats.append(SubjectStat(
            subject=subject,
            attempts=len(records),
            accuracy=accuracy(correct, total),
            average_score=average_score,
        ))
    stats.sort(key=lambda s: s.accuracy)
    return stats


def topic_from_title(title) -> str:
    """Everything before the first colon of a quiz title, e.g. "Algebra: Week 3" -> "Algebra"."""
    topic = str(title or "").split(":")[0].strip()
    return topic or GENERAL_TOPIC


def compute_topic_stats(records: Iterable[AttemptRecord]) -> List[TopicStat]:
    totals: Dict[str, List[float]] = OrderedDict()
    for record in records:
        bucket = totals.setdefault(topic_from_title(record.title), [0.0, 0.0])
        bucket[0] += as_number(record.correct_answers)
        bucket[1] += as_number(record.total_questions)
    stats = [TopicStat(topic=topic, accuracy=accuracy(correct, total))
             for topic, (correct, total) in totals.items()]
    stats.sort(key=lambda t: t.accuracy)
    return stats


def weakest(stats, key: str, threshold: int = DEFAULT_WEAK_THRESHOLD,
            limit: int = DEFAULT_WEAK_LIMIT) -> List[str]:
    """Names from an ascending stats list whose accuracy is under the threshold, at most `limit`."""
    return [getattr(s, key) for s in stats if s.accuracy < threshold][:limit]


def suggest_difficulty(stats: List[SubjectStat]) -> str:
    if not stats:
        return DEFAULT_DIFFICULTY
    mean_accuracy = round_half_up(sum(s.accuracy for s in stats) / len(stats))
    if mean_accuracy >= 80:
        return "hard"
    if mean_accuracy >= 55:
        return "medium"
    return "easy"


def build_recommendations(weak_subjects: List[str], weakest_topics: List[str], difficulty: str) -> List[str]:
    recommendations = []
    if weak_subjects:
        recommendations.append(f"Focus on {', '.join(weak_subjects)}.")
    if weakest_topics:
        recommendations.append(f"Review topics: {', '.join(weakest_topics)}.")
    recommendations.append(f"Next quiz difficulty: {difficulty}.")
    return recommendations


def analyze(records: List[AttemptRecord], threshold: int = DEFAULT_WEAK_THRESHOLD,
            limit: int = DEFAULT_WEAK_LIMIT) -> PerformanceReport:
    subject_stats = compute_subject_stats(group_by_subject(records))
    topic_stats = compute_topic_stats(records)
    weak_subjects = weakest(subject_stats, "subject", threshold, limit)
    weakest_topics = weakest(topic_stats, "topic", threshold, limit)
    difficulty = suggest_difficulty(subject_stats)
    return PerformanceReport(
        subject_stats=subject_stats,
        weak_subjects=weak_subjects,
        topic_stats=topic_stats,
        weakest_topics=weakest_topics,
        recommended_difficulty=difficulty,
        recommendations=build_recommendations(weak_subjects, weakest_topics, difficulty),
    )
