import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()

DataDict = dict[
    # we have to put Any instead of "DataDict" ForwardRef,
    # a TypeError exception will be thrown otherwise
    str,
    int | str | list[str] | list[int] | tuple[int, ...] | tuple[str, ...] | Any | None,
]

BASE_TIMEOUT_IN_SECS_BETWEEN_API_REQUEST_ATTEMPTS = float(
    os.environ.get("BASE_TIMEOUT_IN_SECS_BETWEEN_API_REQUEST_ATTEMPTS", 5)
)
MAX_ATTEMPTS_TO_GET_DATA_FROM_API = int(os.environ.get("MAX_ATTEMPTS_TO_GET_DATA_FROM_API", 10))

REQUEST_TIMEOUT_IN_SECS = 30

SUPABASE_AUTH_PATH = "/auth/v1"
SUPABASE_AUTH_PATH_LOGOUT = f"{SUPABASE_AUTH_PATH}/logout"
SUPABASE_AUTH_PATH_RECOVER = f"{SUPABASE_AUTH_PATH}/recover"
SUPABASE_AUTH_PATH_SIGNUP = f"{SUPABASE_AUTH_PATH}/signup"
SUPABASE_AUTH_PATH_TOKEN = f"{SUPABASE_AUTH_PATH}/token"
SUPABASE_REST_PATH = "/rest/v1"

YOUTUBE_URL_PREFIX = "https://www.googleapis.com/youtube/v3"
YOUTUBE_URL_PLAYLIST_ITEMS = f"{YOUTUBE_URL_PREFIX}/playlistItems"
YOUTUBE_URL_SEARCH = f"{YOUTUBE_URL_PREFIX}/search"
YOUTUBE_URL_VIDEOS = f"{YOUTUBE_URL_PREFIX}/videos"
YOUTUBE_MAX_VIDEO_IDS_PER_REQUEST = 50
YOUTUBE_VIDEO_PARTS = "snippet,contentDetails,statistics"
