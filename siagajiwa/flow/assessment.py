"""Per-session state of an assessment: loading its questions, collecting answers, submitting."""
import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Generic, TypeVar

from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.supabase.auth_client import AuthProvider
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.answer_store import AnswerStore
from siagajiwa.data_structures.enums import LoggingLevel
from siagajiwa.data_structures.load_states import Loaded, LoadFailed, Loading, LoadState
from siagajiwa.data_structures.models import Question
from siagajiwa.flow.outcomes import SubmissionOutcome
from siagajiwa.repositories.quiz import QuizRepository

logger = logging.getLogger(__name__)

R = TypeVar("R")

NO_QUESTIONS_MESSAGE = "No quiz questions found in database"
NOT_LOGGED_IN_MESSAGE = "User not logged in"


class QuestionsNotLoadedError(RuntimeError):
    pass


class AssessmentFlow(ABC, Generic[R]):
    """Base class for one respondent going through one assessment.

    Subclasses define where the questions come from, how the answers are scored
    and where the result is stored. The flow is used from a single task at a time.

    A result that failed to save keeps its record ID, so submitting again overwrites
    the same row.
    """

    load_failed_message = "Failed to load quiz"
    submit_failed_message = "Failed to submit quiz"

    def __init__(self, quiz_repository: QuizRepository, auth: AuthProvider):
        self._quiz_repository = quiz_repository
        self._auth = auth
        self._questions: tuple[Question, ...] = ()
        self._answers: AnswerStore | None = None
        self.state: LoadState[tuple[Question, ...]] = Loading()
        self._pending_record_id: str | None = None

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    async def load(self) -> LoadState[tuple[Question, ...]]:
        """Loads questions and starts a new, empty set of answers."""
        self.state = Loading()

        try:
            questions = await self._fetch_questions()
        except BaseApiClientError as err:
            logs(text=f"{self.load_failed_message}: {err}", level=LoggingLevel.ERROR)
            self.state = LoadFailed(str(err) or self.load_failed_message)
            return self.state

        if not questions:
            self.state = LoadFailed(NO_QUESTIONS_MESSAGE)
            return self.state

        logger.info(f"Loaded {len(questions)} questions of {self.__class__.__name__}")
        self._questions = questions
        self._answers = AnswerStore(question.id for question in questions)
        self._pending_record_id = None
        self.state = Loaded(questions)
        return self.state

    def record_answer(self, question_id: int, value: str) -> None:
        self._answer_store().record(question_id, value)

    def answers(self) -> Mapping[int, str]:
        """Read-only copy of the answers given so far."""
        return self._answer_store().snapshot()

    def result(self) -> R:
        return self._score(self._questions, self.answers())

    async def submit(self) -> SubmissionOutcome[R]:
        """Scores the answers and stores the result for the signed-in user."""
        session = self._auth.current_session()
        if session is None:
            logs(text="Tried to submit without a session", level=LoggingLevel.WARNING)
            return SubmissionOutcome.failure(NOT_LOGGED_IN_MESSAGE)

        if self._pending_record_id is None:
            self._pending_record_id = str(uuid.uuid4())

        outcome = await self._submit_for_user(
            session.user_id, self._questions, self.answers(), self._pending_record_id
        )
        if outcome.succeeded:
            self._pending_record_id = None
        return outcome

    async def _submit_for_user(
        self,
        user_id: str,
        questions: tuple[Question, ...],
        answers: Mapping[int, str],
        record_id: str,
    ) -> SubmissionOutcome[R]:
        result = self._score(questions, answers)

        try:
            await self._store(user_id, result, record_id)
        except BaseApiClientError as err:
            logs(
                text=f"{self.submit_failed_message}: {err}",
                level=LoggingLevel.ERROR,
                user_id=user_id,
            )
            return SubmissionOutcome.failure(str(err) or self.submit_failed_message, result)

        logs(text=f"Result saved with ID {record_id}", user_id=user_id)
        return SubmissionOutcome.success(result, record_id)

    def _answer_store(self) -> AnswerStore:
        if self._answers is None:
            raise QuestionsNotLoadedError("Questions have to be loaded before answering")
        return self._answers

    @abstractmethod
    async def _fetch_questions(self) -> tuple[Question, ...]:
        ...

    @abstractmethod
    def _score(self, questions: tuple[Question, ...], answers: Mapping[int, str]) -> R:
        ...

    @abstractmethod
    async def _store(self, user_id: str, result: R, record_id: str) -> str:
        """Saves ``result`` under ``record_id``, overwriting an earlier save with the same ID."""
