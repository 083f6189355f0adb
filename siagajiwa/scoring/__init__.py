from siagajiwa.scoring.knowledge import (
    classify_knowledge,
    compute_knowledge_result,
    count_correct,
    knowledge_percentage,
)
from siagajiwa.scoring.sanitize import parse_rating, sum_ratings
from siagajiwa.scoring.stress import (
    all_questions_answered,
    classify_stress,
    compute_stress_result,
    max_stress_score,
)

__all__ = [
    "all_questions_answered",
    "classify_knowledge",
    "classify_stress",
    "compute_knowledge_result",
    "compute_stress_result",
    "count_correct",
    "knowledge_percentage",
    "max_stress_score",
    "parse_rating",
    "sum_ratings",
]
