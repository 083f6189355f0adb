"""Various dataclasses for attribute hinting and easy unpacking.

Most of the classes correspond to rows in the hosted database or to results of scoring.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field

from siagajiwa.data_structures.constants import (
    STRESS_BAND_COLORS,
    STRESS_BAND_DESCRIPTIONS,
    STRESS_BAND_TITLES,
)
from siagajiwa.data_structures.enums import KnowledgeBand, StressBand

AnswerCollection = Mapping[int, str]
"""Question ID to the value the respondent submitted: a rating like ``"3"``
or the literal text of the chosen option."""


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    options: tuple[str, ...] = ()
    correct_option_index: int | None = None
    """Only set for graded (knowledge) questions. Rating questions have no correct option."""

    def correct_option(self) -> str | None:
        """Returns text of the correct option, ``None`` if the question is not graded.

        An index that points outside the list of options is treated as "not graded".
        """
        if self.correct_option_index is None:
            return None
        if not 0 <= self.correct_option_index < len(self.options):
            return None
        return self.options[self.correct_option_index]


@dataclass(frozen=True)
class StressResult:
    score: int
    max_score: int
    band: StressBand

    @property
    def percentage(self) -> float:
        """Score as percentage of the maximum. A maximum of 0 gives 0, not an error."""
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score * 100

    @property
    def title(self) -> str:
        return STRESS_BAND_TITLES[self.band]

    @property
    def description(self) -> str:
        """Advice shown to the respondent with the result."""
        return STRESS_BAND_DESCRIPTIONS[self.band]

    @property
    def color(self) -> int:
        return STRESS_BAND_COLORS[self.band]


@dataclass(frozen=True)
class KnowledgeResult:
    correct: int
    total: int
    percentage: int
    band: KnowledgeBand


@dataclass(frozen=True)
class StoredStressResult:
    """A row of ``stress_results``."""

    id: str
    user_id: str
    band: StressBand
    score: int
    test_date: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class StoredKnowledgeResult:
    """A row of ``quiz_results``."""

    id: str
    user_id: str
    score: int
    total_questions: int
    percentage: int
    quiz_date: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Session:
    access_token: str
    user_id: str
    email: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None


@dataclass
class UserProfile:
    user_id: str
    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    knowledge_score: int | None = None
    knowledge_percentage: int | None = None


@dataclass(frozen=True)
class Thumbnail:
    url: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class Video:
    id: str
    title: str
    description: str = ""
    channel_title: str = ""
    published_at: str | None = None
    thumbnail: Thumbnail | None = None
    duration: str | None = None
    """ISO 8601 duration, e.g. ``PT4M13S``. Only present in video details, not search results."""
    view_count: int | None = None


@dataclass(frozen=True)
class VideoPage:
    videos: tuple[Video, ...]
    total_results: int = 0
    next_page_token: str | None = None
    prev_page_token: str | None = None


@dataclass(frozen=True)
class MediaItem:
    """A row of one of the media tables, optionally enriched with video metadata."""

    id: int
    link: str
    order: int
    created_at: str | None = None
    video: Video | None = field(default=None, compare=False)
