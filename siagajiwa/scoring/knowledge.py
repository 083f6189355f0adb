"""Scoring of the patient care knowledge quiz.

A multiple-choice answer is correct when it is exactly the text of the question's
correct option. The percentage is taken over *all* questions of the quiz, so questions
left unanswered count against the respondent.
"""
from collections.abc import Sequence

from siagajiwa.data_structures.constants import (
    KNOWLEDGE_BAND_FALLBACK,
    KNOWLEDGE_BAND_MIN_PERCENTAGES,
)
from siagajiwa.data_structures.enums import KnowledgeBand
from siagajiwa.data_structures.models import AnswerCollection, KnowledgeResult, Question


def count_correct(questions: Sequence[Question], answers: AnswerCollection) -> int:
    """Counts answers that match the correct option.

    Questions without a correct option and questions without an answer are skipped.
    """
    correct = 0
    for question in questions:
        correct_option = question.correct_option()
        if correct_option is None:
            continue

        answer = answers.get(question.id)
        if answer is not None and answer == correct_option:
            correct += 1
    return correct


def knowledge_percentage(correct: int, total: int) -> int:
    """Whole percentage of correct answers, rounded down. 0 if there are no questions."""
    if total <= 0:
        return 0
    return correct * 100 // total


def classify_knowledge(percentage: int) -> KnowledgeBand:
    for min_percentage, band in KNOWLEDGE_BAND_MIN_PERCENTAGES:
        if percentage >= min_percentage:
            return band
    return KNOWLEDGE_BAND_FALLBACK


def compute_knowledge_result(
    questions: Sequence[Question], answers: AnswerCollection
) -> KnowledgeResult:
    correct = count_correct(questions, answers)
    total = len(questions)
    percentage = knowledge_percentage(correct, total)
    return KnowledgeResult(
        correct=correct,
        total=total,
        percentage=percentage,
        band=classify_knowledge(percentage),
    )
