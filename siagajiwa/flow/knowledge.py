import typing
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field

from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.enums import LoggingLevel
from siagajiwa.data_structures.models import KnowledgeResult, Question
from siagajiwa.flow.assessment import NOT_LOGGED_IN_MESSAGE, AssessmentFlow
from siagajiwa.flow.outcomes import SubmissionOutcome
from siagajiwa.scoring.knowledge import compute_knowledge_result

NOTHING_STORED_MESSAGE = "No quiz data to submit"
SESSION_EXPIRED_MESSAGE = f"{NOT_LOGGED_IN_MESSAGE}. Please sign in again."


@dataclass(frozen=True)
class StoredAttempt:
    """Questions and answers of a finished quiz that wasn't submitted yet."""

    questions: tuple[Question, ...]
    answers: Mapping[int, str]
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Kept across retries so a failed save is overwritten, not duplicated."""


class KnowledgeAssessmentFlow(AssessmentFlow[KnowledgeResult]):
    """Multiple-choice quiz on caring for a patient.

    A finished quiz can be kept with ``store_for_later()`` and submitted with
    ``submit_stored()`` once the user has signed in.
    """

    load_failed_message = "Failed to load knowledge quiz"
    submit_failed_message = "Failed to submit knowledge quiz"

    def __init__(self, *args: typing.Any, **kwargs: typing.Any):
        super().__init__(*args, **kwargs)
        self._stored: StoredAttempt | None = None

    @property
    def has_stored_attempt(self) -> bool:
        return self._stored is not None

    def store_for_later(self) -> KnowledgeResult:
        """Keeps the current answers and returns their result without submitting it."""
        self._stored = StoredAttempt(questions=self.questions, answers=self.answers())
        logs(text=f"Stored answers to {len(self._stored.answers)} questions for later")
        return self._score(self._stored.questions, self._stored.answers)

    async def submit_stored(self) -> SubmissionOutcome[KnowledgeResult]:
        if self._stored is None:
            return SubmissionOutcome.failure(NOTHING_STORED_MESSAGE)

        session = self._auth.current_session()
        if session is None:
            logs(
                text="Tried to submit stored answers without a session",
                level=LoggingLevel.WARNING,
            )
            return SubmissionOutcome.failure(SESSION_EXPIRED_MESSAGE)

        outcome = await self._submit_for_user(
            session.user_id,
            self._stored.questions,
            self._stored.answers,
            self._stored.record_id,
        )
        if outcome.succeeded:
            self._stored = None
        return outcome

    async def _fetch_questions(self) -> tuple[Question, ...]:
        return await self._quiz_repository.get_knowledge_questions()

    def _score(
        self, questions: tuple[Question, ...], answers: Mapping[int, str]
    ) -> KnowledgeResult:
        return compute_knowledge_result(questions, answers)

    async def _store(self, user_id: str, result: KnowledgeResult, record_id: str) -> str:
        return await self._quiz_repository.submit_knowledge_result(user_id, result, record_id)
