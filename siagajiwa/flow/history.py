import logging
from dataclasses import dataclass

from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.enums import LoggingLevel
from siagajiwa.data_structures.models import StoredKnowledgeResult, StoredStressResult
from siagajiwa.repositories.quiz import QuizRepository

logger = logging.getLogger(__name__)

STRESS_HISTORY_FAILED_MESSAGE = "Failed to load stress history"
KNOWLEDGE_HISTORY_FAILED_MESSAGE = "Failed to load quiz history"


@dataclass(frozen=True)
class HistoryState:
    stress_history: tuple[StoredStressResult, ...] = ()
    """Newest first."""
    knowledge_history: tuple[StoredKnowledgeResult, ...] = ()
    """Newest first."""
    error: str | None = None
    """Message of the last load that failed. The other history can still be present."""


class ActivityHistory:
    """Past results of both assessments for one user."""

    def __init__(self, quiz_repository: QuizRepository):
        self._quiz_repository = quiz_repository
        self.state = HistoryState()

    async def load(self, user_id: str) -> HistoryState:
        """Loads both histories. A failure of one of them doesn't prevent loading the other."""
        stress_history: tuple[StoredStressResult, ...] = ()
        knowledge_history: tuple[StoredKnowledgeResult, ...] = ()
        error = None

        try:
            stress_history = await self._quiz_repository.get_all_stress_results(user_id)
        except BaseApiClientError as err:
            logs(text=f"{err}", level=LoggingLevel.ERROR, user_id=user_id)
            error = str(err) or STRESS_HISTORY_FAILED_MESSAGE

        try:
            knowledge_history = await self._quiz_repository.get_all_knowledge_results(user_id)
        except BaseApiClientError as err:
            logs(text=f"{err}", level=LoggingLevel.ERROR, user_id=user_id)
            error = str(err) or KNOWLEDGE_HISTORY_FAILED_MESSAGE

        logger.info(
            f"Loaded {len(stress_history)} stress and {len(knowledge_history)} knowledge "
            f"results of user {user_id}"
        )
        self.state = HistoryState(
            stress_history=stress_history, knowledge_history=knowledge_history, error=error
        )
        return self.state
