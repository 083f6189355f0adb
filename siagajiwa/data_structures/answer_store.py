import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)


class UnknownQuestionError(KeyError):
    """Raised when an answer is recorded for a question that is not part of the assessment."""


class AnswerStore:
    """Answers of one respondent to one assessment, built up while they go through it.

    Only the latest answer to each question is kept. The store belongs to a single
    assessment session: it is not meant to be shared between tasks, and scoring
    should read a ``snapshot()`` rather than the store itself.
    """

    def __init__(self, question_ids: Iterable[int]):
        self._question_ids = frozenset(question_ids)
        self._answers: dict[int, str] = {}

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(answered={len(self._answers)}, "
            f"questions={len(self._question_ids)})"
        )

    @property
    def question_count(self) -> int:
        return len(self._question_ids)

    def clear(self) -> None:
        self._answers.clear()

    def get(self, question_id: int) -> str | None:
        return self._answers.get(question_id)

    def record(self, question_id: int, value: str) -> None:
        """Stores the answer, replacing any earlier answer to the same question."""
        if question_id not in self._question_ids:
            raise UnknownQuestionError(question_id)

        if question_id in self._answers:
            logger.debug(f"Replacing answer to question {question_id}")
        self._answers[question_id] = value

    def snapshot(self) -> Mapping[int, str]:
        """Returns a read-only copy of the answers that later changes to the store won't affect."""
        return MappingProxyType(dict(self._answers))
