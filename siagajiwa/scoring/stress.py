"""Scoring of the caregiver stress questionnaire.

Each item is rated 0-4 and the ratings are summed:

- 0-13: low stress
- 14-26: medium stress
- 27-40: high stress

Totals above 40 can only come from more answers than the questionnaire has
(or from ratings above 4) and are treated as high stress.
"""
import logging

from siagajiwa.data_structures.constants import (
    MAX_RATING,
    STRESS_BAND_ABOVE_RANGES,
    STRESS_BAND_BELOW_RANGES,
    STRESS_BAND_RANGES,
)
from siagajiwa.data_structures.enums import StressBand
from siagajiwa.data_structures.models import AnswerCollection, StressResult
from siagajiwa.scoring.sanitize import sum_ratings

logger = logging.getLogger(__name__)


def classify_stress(score: int) -> StressBand:
    for low, high, band in STRESS_BAND_RANGES:
        if low <= score <= high:
            return band

    if score < STRESS_BAND_RANGES[0][0]:
        return STRESS_BAND_BELOW_RANGES
    return STRESS_BAND_ABOVE_RANGES


def max_stress_score(answered_count: int) -> int:
    """Highest score possible with this many answers."""
    return max(answered_count, 0) * MAX_RATING


def compute_stress_result(answers: AnswerCollection, question_count: int) -> StressResult:
    """Sums the ratings in ``answers`` and determines the stress band.

    The maximum score is based on the number of *answered* questions, so an incomplete
    questionnaire lowers the maximum instead of counting missing items as 0.
    ``question_count`` is only used to detect more answers than questions.
    """
    if len(answers) > question_count:
        logger.warning(
            f"Received {len(answers)} answers for a questionnaire of {question_count} questions"
        )

    score = sum_ratings(answers)
    return StressResult(
        score=score,
        max_score=max_stress_score(len(answers)),
        band=classify_stress(score),
    )


def all_questions_answered(answers: AnswerCollection, question_count: int) -> bool:
    return len(answers) == question_count and all(answers.values())
