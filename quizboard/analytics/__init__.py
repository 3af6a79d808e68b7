from .performance import (
    AttemptRecord, SubjectStat, TopicStat, PerformanceReport,
    analyze, accuracy, compute_subject_stats, compute_topic_stats,
    group_by_subject, suggest_difficulty, topic_from_title, weakest,
)
