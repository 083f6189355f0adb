"""Functions for interaction with YouTube Data API v3 (metadata of educational videos)."""
import re
import typing

import httpx

from siagajiwa.api_clients.auxil.constants import (
    YOUTUBE_MAX_VIDEO_IDS_PER_REQUEST,
    YOUTUBE_URL_PLAYLIST_ITEMS,
    YOUTUBE_URL_SEARCH,
    YOUTUBE_URL_VIDEOS,
    YOUTUBE_VIDEO_PARTS,
    DataDict,
)
from siagajiwa.api_clients.auxil.models import NotificationParams
from siagajiwa.api_clients.base.base_api_client import BaseApiClient
from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.youtube.exceptions import (
    YouTubeJSONParsingError,
    YouTubeRequestError,
)
from siagajiwa.auxil.constants import YOUTUBE_API_KEY
from siagajiwa.data_structures.models import Thumbnail, Video, VideoPage

VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")
VIDEO_ID_IN_LINK_PATTERN = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/|live/)|youtu\.be/)([A-Za-z0-9_-]{11})"
)
THUMBNAIL_PREFERENCE = ("high", "medium", "default")


def extract_video_id(link: str) -> str | None:
    """Gets video ID from a watch/short/embed link, or from a bare ID."""
    link = link.strip()
    if VIDEO_ID_PATTERN.fullmatch(link):
        return link

    match = VIDEO_ID_IN_LINK_PATTERN.search(link)
    return match.group(1) if match else None


class YouTubeClient(BaseApiClient):
    def __init__(
        self,
        api_key: str = YOUTUBE_API_KEY,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: typing.Any,
    ):
        super().__init__(http_client=http_client, **kwargs)
        self._api_key = api_key

    async def search_videos(
        self,
        query: str,
        max_results: int = 10,
        order: str = "relevance",
        page_token: str | None = None,
    ) -> VideoPage:
        params: DataDict = {
            "q": query,
            "part": "snippet",
            "type": "video",
            "maxResults": max_results,
            "order": order,
        }
        if page_token is not None:
            params["pageToken"] = page_token

        data = await self._get_data(YOUTUBE_URL_SEARCH, params, f"search results for {query=}")
        return self._page_from_data(data, self._video_from_search_result)

    async def get_video_details(self, video_id: str) -> Video | None:
        videos = await self.get_videos([video_id])
        return videos[0] if videos else None

    async def get_videos(self, video_ids: typing.Sequence[str]) -> tuple[Video, ...]:
        """Gets details of videos, in as many requests as the per-request ID limit needs."""
        videos: list[Video] = []
        for start in range(0, len(video_ids), YOUTUBE_MAX_VIDEO_IDS_PER_REQUEST):
            chunk = video_ids[start : start + YOUTUBE_MAX_VIDEO_IDS_PER_REQUEST]
            data = await self._get_data(
                YOUTUBE_URL_VIDEOS,
                {"id": ",".join(chunk), "part": YOUTUBE_VIDEO_PARTS},
                f"details of {len(chunk)} video(s)",
            )
            videos.extend(self._page_from_data(data, self._video_from_video_resource).videos)
        return tuple(videos)

    async def get_playlist_items(
        self,
        playlist_id: str,
        max_results: int = 25,
        page_token: str | None = None,
    ) -> VideoPage:
        params: DataDict = {
            "playlistId": playlist_id,
            "part": "snippet,contentDetails",
            "maxResults": max_results,
        }
        if page_token is not None:
            params["pageToken"] = page_token

        data = await self._get_data(
            YOUTUBE_URL_PLAYLIST_ITEMS, params, f"items of playlist {playlist_id}"
        )
        return self._page_from_data(data, self._video_from_playlist_item)

    async def _get_data(self, url: str, params: DataDict, description: str) -> DataDict:
        try:
            _, data = await self.get(
                url=url,
                params={**params, "key": self._api_key},
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Received {description} from YouTube"),
                },
            )
        except BaseApiClientError as err:
            raise YouTubeRequestError(f"Failed to get {description} from YouTube") from err

        # for mypy
        if not isinstance(data, dict):
            raise YouTubeJSONParsingError(f"Response from YouTube is not a dictionary: {data}")

        return data

    @classmethod
    def _page_from_data(
        cls, data: DataDict, make_video: typing.Callable[[DataDict], Video | None]
    ) -> VideoPage:
        try:
            items = cls._get_value(data, "items")
            videos = tuple(video for video in map(make_video, items) if video is not None)
        except (BaseApiClientError, AttributeError, KeyError, TypeError, ValueError) as err:
            raise YouTubeJSONParsingError(f"Could not parse YouTube {data=}") from err

        return VideoPage(
            videos=videos,
            total_results=data.get("pageInfo", {}).get("totalResults", len(videos)),
            next_page_token=data.get("nextPageToken"),
            prev_page_token=data.get("prevPageToken"),
        )

    @classmethod
    def _video_from_search_result(cls, item: DataDict) -> Video | None:
        # search results may also contain channels and playlists
        video_id = item.get("id", {}).get("videoId")
        if video_id is None:
            return None
        return cls._video(video_id, cls._get_value(item, "snippet"))

    @classmethod
    def _video_from_video_resource(cls, item: DataDict) -> Video:
        statistics = item.get("statistics") or {}
        view_count = statistics.get("viewCount")
        return cls._video(
            cls._get_value(item, "id"),
            cls._get_value(item, "snippet"),
            duration=(item.get("contentDetails") or {}).get("duration"),
            view_count=int(view_count) if view_count is not None else None,
        )

    @classmethod
    def _video_from_playlist_item(cls, item: DataDict) -> Video | None:
        snippet = cls._get_value(item, "snippet")
        video_id = (item.get("contentDetails") or {}).get("videoId") or snippet.get(
            "resourceId", {}
        ).get("videoId")
        if video_id is None:
            return None
        return cls._video(video_id, snippet)

    @staticmethod
    def _video(video_id: str, snippet: DataDict, **details: typing.Any) -> Video:
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = next(
            (
                Thumbnail(
                    url=thumbnails[size]["url"],
                    width=thumbnails[size].get("width"),
                    height=thumbnails[size].get("height"),
                )
                for size in THUMBNAIL_PREFERENCE
                if size in thumbnails
            ),
            None,
        )
        return Video(
            id=video_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            channel_title=snippet.get("channelTitle", ""),
            published_at=snippet.get("publishedAt"),
            thumbnail=thumbnail,
            **details,
        )
