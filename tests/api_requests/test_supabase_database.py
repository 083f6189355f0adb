import json

import httpx
import pytest

from siagajiwa.api_clients.supabase.database_client import SupabaseDatabaseClient
from siagajiwa.api_clients.supabase.exceptions import (
    SupabaseJSONParsingError,
    SupabaseRequestError,
)
from siagajiwa.data_structures.models import Session

BASE_URL = "https://project.supabase.co"
ANON_KEY = "anon-key"


class FakeAuth:
    def __init__(self, session: Session | None = None):
        self.session = session

    def current_session(self) -> Session | None:
        return self.session


def make_client(handler, session: Session | None = None) -> SupabaseDatabaseClient:
    return SupabaseDatabaseClient(
        auth=FakeAuth(session),  # type: ignore[arg-type]
        base_url=BASE_URL,
        api_key=ANON_KEY,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        base_timeout_between_attempts=0,
        max_attempts=1,
    )


async def test_select_builds_postgrest_query():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[{"id": 1}])

    client = make_client(handler)

    rows = await client.select(
        "stress_results", filters={"user_id": "u1"}, order="test_date", descending=True, limit=1
    )

    assert rows == [{"id": 1}]
    request = requests[0]
    assert request.url.path == "/rest/v1/stress_results"
    assert dict(request.url.params) == {
        "select": "*",
        "user_id": "eq.u1",
        "order": "test_date.desc",
        "limit": "1",
    }
    assert request.headers["Authorization"] == f"Bearer {ANON_KEY}"


async def test_requests_are_made_with_session_token():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[])

    client = make_client(handler, Session(access_token="user-token", user_id="u1"))
    await client.select("profiles")

    assert requests[0].headers["Authorization"] == "Bearer user-token"
    assert requests[0].headers["apikey"] == ANON_KEY


async def test_insert_returns_stored_row():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(201, json=[{"id": "r1", "stress_score": 9}])

    client = make_client(handler)

    row = await client.insert("stress_results", {"id": "r1", "stress_score": 9})

    assert row == {"id": "r1", "stress_score": 9}
    assert requests[0].method == "POST"
    assert requests[0].headers["Prefer"] == "return=representation"
    assert json.loads(requests[0].content) == {"id": "r1", "stress_score": 9}


async def test_insert_without_returned_row():
    client = make_client(lambda request: httpx.Response(201, json=[]))
    with pytest.raises(SupabaseJSONParsingError):
        await client.insert("stress_results", {"id": "r1"})


async def test_update_filters_rows():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[{"user_id": "u1", "knowledge_score": 8}])

    client = make_client(handler)

    rows = await client.update("profiles", {"knowledge_score": 8}, filters={"user_id": "u1"})

    assert rows == [{"user_id": "u1", "knowledge_score": 8}]
    assert requests[0].method == "PATCH"
    assert requests[0].url.params["user_id"] == "eq.u1"


async def test_update_without_filters_is_refused():
    client = make_client(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(ValueError):
        await client.update("profiles", {"knowledge_score": 8}, filters={})


async def test_unexpected_status_becomes_request_error():
    client = make_client(lambda request: httpx.Response(401, json={"message": "JWT expired"}))
    with pytest.raises(SupabaseRequestError):
        await client.select("profiles")


async def test_response_that_is_not_a_list():
    client = make_client(lambda request: httpx.Response(200, json={"id": 1}))
    with pytest.raises(SupabaseJSONParsingError):
        await client.select("profiles")


@pytest.mark.parametrize(
    "upsert, status_code, expected_prefer",
    [
        (False, 201, "return=representation"),
        (True, 201, "return=representation,resolution=merge-duplicates"),
        (True, 200, "return=representation,resolution=merge-duplicates"),
    ],
)
async def test_insert_with_upsert(upsert, status_code, expected_prefer):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status_code, json=[{"id": "r1"}])

    client = make_client(handler)

    assert await client.insert("quiz_results", {"id": "r1"}, upsert=upsert) == {"id": "r1"}
    assert requests[0].headers["Prefer"] == expected_prefer
