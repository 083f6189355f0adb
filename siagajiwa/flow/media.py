"""Educational videos shown next to the assessments, with metadata from YouTube."""
import dataclasses
import logging
from collections.abc import Awaitable, Callable

from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.youtube.client import YouTubeClient, extract_video_id
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.enums import LoggingLevel, MediaCategory
from siagajiwa.data_structures.load_states import Loaded, LoadFailed, Loading, LoadState
from siagajiwa.data_structures.models import MediaItem
from siagajiwa.repositories.media import MediaRepository

logger = logging.getLogger(__name__)

MediaState = LoadState[tuple[MediaItem, ...]]

EMPTY_MESSAGES = {
    MediaCategory.STRESS: "No stress management media found",
    MediaCategory.PATIENT_CARE: "No patient care media found",
    MediaCategory.SCHIZOPHRENIA: "No schizophrenia media found",
}
LOAD_FAILED_MESSAGES = {
    MediaCategory.STRESS: "Failed to load stress media",
    MediaCategory.PATIENT_CARE: "Failed to load patient care media",
    MediaCategory.SCHIZOPHRENIA: "Failed to load schizophrenia media",
}


class MediaLibrary:
    """Keeps a load state for each media category.

    If a YouTube client is given, loaded items get their video metadata attached.
    """

    def __init__(self, media_repository: MediaRepository, youtube: YouTubeClient | None = None):
        self._media_repository = media_repository
        self._youtube = youtube
        self.states: dict[MediaCategory, MediaState] = {
            category: Loading() for category in MediaCategory
        }

    async def load_stress_media(self) -> MediaState:
        return await self._load(MediaCategory.STRESS, self._media_repository.get_stress_media)

    async def load_patient_care_media(self, patient_type: str) -> MediaState:
        async def get_media() -> tuple[MediaItem, ...]:
            return await self._media_repository.get_patient_care_media(patient_type)

        return await self._load(MediaCategory.PATIENT_CARE, get_media)

    async def load_schizophrenia_media(self) -> MediaState:
        return await self._load(
            MediaCategory.SCHIZOPHRENIA, self._media_repository.get_schizophrenia_media
        )

    async def load_video_details(self, items: tuple[MediaItem, ...]) -> tuple[MediaItem, ...]:
        """Attaches YouTube metadata to items whose link points to a video.

        Metadata is optional: if YouTube can't be reached, items are returned unchanged.
        """
        if self._youtube is None:
            return items

        video_ids = [extract_video_id(item.link) for item in items]
        known_ids = [video_id for video_id in video_ids if video_id is not None]
        if not known_ids:
            return items

        try:
            videos = await self._youtube.get_videos(list(dict.fromkeys(known_ids)))
        except BaseApiClientError as err:
            logs(text=f"Could not load video details: {err}", level=LoggingLevel.WARNING)
            return items

        video_for_id = {video.id: video for video in videos}
        return tuple(
            dataclasses.replace(item, video=video_for_id[video_id])
            if video_id in video_for_id
            else item
            for item, video_id in zip(items, video_ids)
        )

    async def _load(
        self,
        category: MediaCategory,
        get_media: Callable[[], Awaitable[tuple[MediaItem, ...]]],
    ) -> MediaState:
        self.states[category] = Loading()

        try:
            items = await get_media()
        except BaseApiClientError as err:
            logs(text=f"Could not load {category.value}: {err}", level=LoggingLevel.ERROR)
            self.states[category] = LoadFailed(str(err) or LOAD_FAILED_MESSAGES[category])
            return self.states[category]

        if not items:
            self.states[category] = LoadFailed(EMPTY_MESSAGES[category])
            return self.states[category]

        logger.info(f"Loaded {len(items)} items of {category.value}")
        self.states[category] = Loaded(await self.load_video_details(items))
        return self.states[category]
