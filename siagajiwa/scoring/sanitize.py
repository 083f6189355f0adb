"""Sanitizing of raw answer values before they are scored.

Scoring never fails on bad input: a value that can't be read is replaced with a neutral
default and the fact is logged, so the respondent is never blocked at submission.
"""
import logging
import re

from siagajiwa.data_structures.constants import MAX_RATING, MIN_RATING
from siagajiwa.data_structures.models import AnswerCollection

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
"""Plain ASCII integer with optional sign. Surrounding whitespace is not accepted."""

MALFORMED_RATING_DEFAULT = 0


def parse_rating(value: str) -> int:
    """Returns the integer rating encoded in ``value``, or 0 if ``value`` is not an integer."""
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value):
        rating = int(value)
        if not MIN_RATING <= rating <= MAX_RATING:
            logger.warning(f"Rating {rating} is outside of {MIN_RATING}-{MAX_RATING} scale")
        return rating

    logger.warning(f"Malformed rating {value!r} counted as {MALFORMED_RATING_DEFAULT}")
    return MALFORMED_RATING_DEFAULT


def sum_ratings(answers: AnswerCollection) -> int:
    return sum(parse_rating(value) for value in answers.values())
