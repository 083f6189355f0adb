from siagajiwa.flow.assessment import AssessmentFlow, QuestionsNotLoadedError
from siagajiwa.flow.history import ActivityHistory, HistoryState
from siagajiwa.flow.knowledge import KnowledgeAssessmentFlow
from siagajiwa.flow.media import MediaLibrary
from siagajiwa.flow.outcomes import SubmissionOutcome
from siagajiwa.flow.stress import StressAssessmentFlow

__all__ = [
    "ActivityHistory",
    "AssessmentFlow",
    "HistoryState",
    "KnowledgeAssessmentFlow",
    "MediaLibrary",
    "QuestionsNotLoadedError",
    "StressAssessmentFlow",
    "SubmissionOutcome",
]
