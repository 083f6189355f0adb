from enum import Enum


class HttpMethod(str, Enum):
    # http.HTTPMethod only comes in Python 3.11
    GET = "get"
    PATCH = "patch"
    POST = "post"
