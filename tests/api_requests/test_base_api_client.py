import json

import httpx
import pytest

from siagajiwa.api_clients.auxil.models import NotificationParams
from siagajiwa.api_clients.base.base_api_client import BaseApiClient
from siagajiwa.api_clients.base.exceptions import BaseApiClientError

URL = "https://api.example.com/items"
OK_ONLY = {httpx.codes.OK: NotificationParams("Received items")}


def make_client(handler, max_attempts: int = 3) -> BaseApiClient:
    return BaseApiClient(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        base_timeout_between_attempts=0,
        max_attempts=max_attempts,
    )


async def test_get_returns_status_code_and_json():
    client = make_client(lambda request: httpx.Response(200, json={"items": [1, 2]}))
    assert await client.get(URL, OK_ONLY) == (200, {"items": [1, 2]})


async def test_empty_body_gives_none():
    client = make_client(lambda request: httpx.Response(200))
    assert await client.get(URL, OK_ONLY) == (200, None)


async def test_unexpected_status_code_raises():
    client = make_client(lambda request: httpx.Response(404, json={"detail": "not found"}))
    with pytest.raises(BaseApiClientError, match="404"):
        await client.get(URL, OK_ONLY)


async def test_invalid_json_raises():
    client = make_client(lambda request: httpx.Response(200, content=b"<html></html>"))
    with pytest.raises(BaseApiClientError, match="JSON"):
        await client.get(URL, OK_ONLY)


@pytest.mark.parametrize("status_code", [500, 502, 503, 504])
async def test_retries_on_server_errors(status_code):
    responses = iter(
        [httpx.Response(status_code), httpx.Response(status_code), httpx.Response(200, json=[])]
    )
    requests = []

    def handler(request):
        requests.append(request)
        return next(responses)

    client = make_client(handler)

    assert await client.get(URL, OK_ONLY) == (200, [])
    assert len(requests) == 3


async def test_gives_up_after_max_attempts():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(503)

    client = make_client(handler, max_attempts=4)

    with pytest.raises(BaseApiClientError, match="4 attempts"):
        await client.get(URL, OK_ONLY)
    assert len(requests) == 4


async def test_does_not_retry_client_errors():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(400, json={"error": "bad"})

    client = make_client(handler)

    status_code, data = await client.get(
        URL, {httpx.codes.BAD_REQUEST: NotificationParams("Bad request")}
    )
    assert (status_code, data) == (400, {"error": "bad"})
    assert len(requests) == 1


async def test_transport_error_raises_without_retrying():
    requests = []

    def handler(request):
        requests.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(BaseApiClientError):
        await client.get(URL, OK_ONLY)
    assert len(requests) == 1


async def test_post_sends_json_and_params():
    received = []

    def handler(request):
        received.append(request)
        return httpx.Response(201, json={"id": 1})

    client = make_client(handler)

    await client.post(
        URL,
        {httpx.codes.CREATED: NotificationParams("Created")},
        json_data={"name": "test"},
        params={"grant_type": "password"},
    )

    request = received[0]
    assert request.method == "POST"
    assert request.url.params["grant_type"] == "password"
    assert json.loads(request.content) == {"name": "test"}


async def test_patch_sends_json():
    received = []

    def handler(request):
        received.append(request)
        return httpx.Response(200, json=[])

    client = make_client(handler)
    await client.patch(URL, OK_ONLY, json_data={"name": "new"})

    assert received[0].method == "PATCH"
    assert json.loads(received[0].content) == {"name": "new"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"data": {"a": 1}, "json_data": {"a": 1}},
    ],
)
async def test_post_requires_exactly_one_body(kwargs):
    client = make_client(lambda request: httpx.Response(200))
    with pytest.raises(TypeError):
        await client.post(URL, OK_ONLY, **kwargs)


def test_get_value():
    assert BaseApiClient._get_value({"a": 1}, "a") == 1
    with pytest.raises(BaseApiClientError):
        BaseApiClient._get_value({"a": 1}, "b")
    with pytest.raises(BaseApiClientError):
        BaseApiClient._get_value(None, "a")  # type: ignore[arg-type]
