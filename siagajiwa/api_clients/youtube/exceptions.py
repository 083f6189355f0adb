from siagajiwa.api_clients.base.exceptions import BaseApiClientError


class YouTubeClientError(BaseApiClientError):
    pass


class YouTubeJSONParsingError(YouTubeClientError):
    pass


class YouTubeRequestError(YouTubeClientError):
    pass
