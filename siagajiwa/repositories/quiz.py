"""Questions and results of both assessments, stored in the hosted database."""
import logging
import typing
import uuid
from datetime import datetime, timezone

from siagajiwa.api_clients.supabase.database_client import Row, SupabaseDatabaseClient
from siagajiwa.api_clients.supabase.exceptions import SupabaseJSONParsingError
from siagajiwa.data_structures.constants import (
    ANSWER_OPTIONS_SEPARATOR,
    TABLE_KNOWLEDGE_QUIZ,
    TABLE_KNOWLEDGE_RESULTS,
    TABLE_PROFILES,
    TABLE_STRESS_QUIZ,
    TABLE_STRESS_RESULTS,
)
from siagajiwa.data_structures.enums import StressBand
from siagajiwa.data_structures.models import (
    KnowledgeResult,
    Question,
    StoredKnowledgeResult,
    StoredStressResult,
    StressResult,
)

logger = logging.getLogger(__name__)


def split_answer_options(answer_option: str | None) -> tuple[str, ...]:
    """Splits ``"option1|option2|option3"`` into stripped options."""
    if not answer_option:
        return ()
    return tuple(option.strip() for option in answer_option.split(ANSWER_OPTIONS_SEPARATOR))


class QuizRepository:
    def __init__(self, db: SupabaseDatabaseClient):
        self._db = db

    async def get_stress_questions(self) -> tuple[Question, ...]:
        """Gets questions of the stress questionnaire.

        These are answered on a 0-4 scale, so stored answer options and correct answers
        are ignored.
        """
        rows = await self._db.select(TABLE_STRESS_QUIZ)
        logger.info(f"Loaded {len(rows)} stress questions")
        return tuple(
            Question(id=self._question_id(row), text=row.get("question_text") or "")
            for row in self._sorted(rows)
        )

    async def get_knowledge_questions(self) -> tuple[Question, ...]:
        rows = await self._db.select(TABLE_KNOWLEDGE_QUIZ)
        logger.info(f"Loaded {len(rows)} knowledge questions")
        return tuple(
            Question(
                id=self._question_id(row),
                text=row.get("question_text") or "",
                options=split_answer_options(row.get("answer_option")),
                correct_option_index=row.get("correct_answer"),
            )
            for row in self._sorted(rows)
        )

    async def insert_stress_result(
        self, user_id: str, result: StressResult, result_id: str | None = None
    ) -> str:
        """Stores the result, returns ID of the row.

        Storing again with the same ``result_id`` overwrites the row instead of adding one.
        """
        result_id = result_id or str(uuid.uuid4())
        await self._db.insert(
            TABLE_STRESS_RESULTS,
            {
                "id": result_id,
                "user_id": user_id,
                "stress_level": result.band.value,
                "stress_score": result.score,
                "test_date": datetime.now(timezone.utc).date().isoformat(),
            },
            upsert=True,
        )
        logger.info(f"Stored stress result {result_id} ({result.band.name}) for user {user_id}")
        return result_id

    async def submit_knowledge_result(
        self, user_id: str, result: KnowledgeResult, result_id: str | None = None
    ) -> str:
        """Stores the result and copies the score to the user's profile.

        Returns ID of the row. If the profile update fails, the call can be repeated with
        the same ``result_id`` without adding a second result.
        """
        result_id = result_id or str(uuid.uuid4())
        await self._db.insert(
            TABLE_KNOWLEDGE_RESULTS,
            {
                "id": result_id,
                "user_id": user_id,
                "quiz_score": result.correct,
                "total_questions": result.total,
                "percentage": result.percentage,
            },
            upsert=True,
        )
        await self._db.update(
            TABLE_PROFILES,
            {"knowledge_score": result.correct, "knowledge_percentage": result.percentage},
            filters={"user_id": user_id},
        )
        logger.info(
            f"Stored knowledge result {result_id} ({result.correct}/{result.total}) "
            f"for user {user_id}"
        )
        return result_id

    async def get_latest_stress_result(self, user_id: str) -> StoredStressResult | None:
        rows = await self._db.select(
            TABLE_STRESS_RESULTS,
            filters={"user_id": user_id},
            order="test_date",
            descending=True,
            limit=1,
        )
        return self._stress_result_from_row(rows[0]) if rows else None

    async def get_all_stress_results(self, user_id: str) -> tuple[StoredStressResult, ...]:
        rows = await self._db.select(
            TABLE_STRESS_RESULTS, filters={"user_id": user_id}, order="test_date", descending=True
        )
        return tuple(self._stress_result_from_row(row) for row in rows)

    async def get_latest_knowledge_result(self, user_id: str) -> StoredKnowledgeResult | None:
        rows = await self._db.select(
            TABLE_KNOWLEDGE_RESULTS,
            filters={"user_id": user_id},
            order="quiz_date",
            descending=True,
            limit=1,
        )
        return self._knowledge_result_from_row(rows[0]) if rows else None

    async def get_all_knowledge_results(self, user_id: str) -> tuple[StoredKnowledgeResult, ...]:
        rows = await self._db.select(
            TABLE_KNOWLEDGE_RESULTS,
            filters={"user_id": user_id},
            order="created_at",
            descending=True,
        )
        return tuple(self._knowledge_result_from_row(row) for row in rows)

    @staticmethod
    def _question_id(row: Row) -> int:
        # the app refers to questions by their number; the row ID is only a fallback
        question_number = row.get("question_number")
        return question_number if question_number is not None else row.get("id", 0)

    @staticmethod
    def _sorted(rows: list[Row]) -> list[Row]:
        def sort_key(row: Row) -> int:
            for key in ("order", "question_number"):
                if row.get(key) is not None:
                    return typing.cast(int, row[key])
            return 0

        return sorted(rows, key=sort_key)

    @staticmethod
    def _stress_result_from_row(row: Row) -> StoredStressResult:
        try:
            return StoredStressResult(
                id=row["id"],
                user_id=row["user_id"],
                band=StressBand(row["stress_level"]),
                score=row["stress_score"],
                test_date=row.get("test_date"),
                created_at=row.get("created_at"),
            )
        except (KeyError, ValueError) as err:
            raise SupabaseJSONParsingError(f"Could not parse stress result {row=}") from err

    @staticmethod
    def _knowledge_result_from_row(row: Row) -> StoredKnowledgeResult:
        try:
            return StoredKnowledgeResult(
                id=row["id"],
                user_id=row["user_id"],
                score=row["quiz_score"],
                total_questions=row["total_questions"],
                percentage=row["percentage"],
                quiz_date=row.get("quiz_date"),
                created_at=row.get("created_at"),
            )
        except KeyError as err:
            raise SupabaseJSONParsingError(f"Could not parse knowledge result {row=}") from err
