"""Constants related to business logic and NOT imported from environment variables."""

from siagajiwa.data_structures.enums import KnowledgeBand, StressBand

MIN_RATING = 0
MAX_RATING = 4
"""Each item of the stress questionnaire is rated on a 0-4 scale."""

STRESS_BAND_RANGES: tuple[tuple[int, int, StressBand], ...] = (
    (0, 13, StressBand.LOW),
    (14, 26, StressBand.MEDIUM),
    (27, 40, StressBand.HIGH),
)
"""Inclusive score ranges, checked in order. The ranges assume the 10-item questionnaire."""

STRESS_BAND_ABOVE_RANGES = StressBand.HIGH
"""Band for totals above the last range (e.g. more answers than the questionnaire has)."""

STRESS_BAND_BELOW_RANGES = StressBand.LOW

KNOWLEDGE_BAND_MIN_PERCENTAGES: tuple[tuple[int, KnowledgeBand], ...] = (
    (76, KnowledgeBand.GOOD),
    (56, KnowledgeBand.ADEQUATE),
)
"""Lowest percentage for each band, highest band first. Anything below the last one is POOR."""

KNOWLEDGE_BAND_FALLBACK = KnowledgeBand.POOR

STRESS_BAND_DESCRIPTIONS = {
    StressBand.LOW: (
        "Anda memiliki tingkat stres yang rendah. Pertahankan pola hidup sehat "
        "dan terus jaga kesehatan mental Anda."
    ),
    StressBand.MEDIUM: (
        "Anda memiliki tingkat stres yang sedang. Pertimbangkan untuk melakukan "
        "aktivitas relaksasi dan konsultasi jika diperlukan."
    ),
    StressBand.HIGH: (
        "Anda memiliki tingkat stres yang tinggi. Sangat disarankan untuk "
        "berkonsultasi dengan profesional kesehatan mental."
    ),
}

STRESS_BAND_TITLES = {
    StressBand.LOW: "Tingkat stres rendah",
    StressBand.MEDIUM: "Tingkat stres sedang",
    StressBand.HIGH: "Tingkat stres tinggi",
}

# ARGB, as used by the mobile client
STRESS_BAND_COLORS = {
    StressBand.LOW: 0xFF4CAF50,
    StressBand.MEDIUM: 0xFFFFA726,
    StressBand.HIGH: 0xFFEF5350,
}

ANSWER_OPTIONS_SEPARATOR = "|"
"""Answer options of a knowledge question are stored as one pipe-separated string."""

TABLE_PROFILES = "profiles"
TABLE_KNOWLEDGE_QUIZ = "perawatan_quiz"
TABLE_KNOWLEDGE_RESULTS = "quiz_results"
TABLE_STRESS_QUIZ = "stress_quiz"
TABLE_STRESS_RESULTS = "stress_results"
