from collections.abc import Mapping

from siagajiwa.data_structures.models import Question, StressResult
from siagajiwa.flow.assessment import AssessmentFlow
from siagajiwa.scoring.stress import all_questions_answered, compute_stress_result


class StressAssessmentFlow(AssessmentFlow[StressResult]):
    """Caregiver stress questionnaire: each question is rated 0-4."""

    load_failed_message = "Failed to load stress quiz"
    submit_failed_message = "Failed to submit stress quiz"

    def is_complete(self) -> bool:
        return all_questions_answered(self.answers(), len(self.questions))

    async def _fetch_questions(self) -> tuple[Question, ...]:
        return await self._quiz_repository.get_stress_questions()

    def _score(self, questions: tuple[Question, ...], answers: Mapping[int, str]) -> StressResult:
        return compute_stress_result(answers, len(questions))

    async def _store(self, user_id: str, result: StressResult, record_id: str) -> str:
        return await self._quiz_repository.insert_stress_result(user_id, result, record_id)
