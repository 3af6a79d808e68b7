from dataclasses import dataclass, field
from typing import List, Dict, Any, Mapping, Optional, Sequence

from quizboard.utils.utils import round_half_up


@dataclass
class ScoredSubmission:
    answers: List[Dict[str, Any]] = field(default_factory=list)
    correct_answers: int = 0
    total_questions: int = 0
    score: int = 0


def _selected_option(answers: Mapping, index: int) -> Optional[int]:
    """Look up the answer for a question by int or string key; anything that is not an int is no answer."""
    if index in answers:
        value = answers[index]
    else:
        value = answers.get(str(index))
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def score_submission(questions: Sequence[Mapping[str, Any]], answers: Optional[Mapping] = None) -> ScoredSubmission:
    """Score a submission against the stored correct-option index of each question.

    Missing answers are recorded with ``selected_option=None`` and count as incorrect.
    """
    answers = answers or {}
    result = ScoredSubmission(total_questions=len(questions))
    for index, question in enumerate(questions):
        selected = _selected_option(answers, index)
        is_correct = selected is not None and selected == question.get("correct_answer")
        if is_correct:
            result.correct_answers += 1
        result.answers.append({
            "question_index": index,
            "selected_option": selected,
            "is_correct": is_correct,
        })
    if result.total_questions:
        result.score = round_half_up(100 * result.correct_answers / result.total_questions)
    return result
