from enum import Enum


class KnowledgeBand(str, Enum):
    """Knowledge level after the patient care quiz, by percentage of correct answers.

    Values are the labels stored in the remote ``quiz_results`` table.
    Members of this enum can be treated as strings.
    """

    GOOD = "Baik"  # 76-100%
    ADEQUATE = "Cukup"  # 56-75%
    POOR = "Kurang"  # below 56%


class LoggingLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    EXCEPTION = "exception"


class StressBand(str, Enum):
    """Caregiver stress level, by total score of the stress questionnaire.

    Values are the labels stored in the remote ``stress_results`` table.
    Members of this enum can be treated as strings.
    """

    LOW = "Rendah"
    MEDIUM = "Sedang"
    HIGH = "Tinggi"


class MediaCategory(str, Enum):
    """Tables that hold links to educational videos."""

    STRESS = "stress_media"
    PATIENT_CARE = "pp_media"
    SCHIZOPHRENIA = "skizo_media"
