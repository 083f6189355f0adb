"""Row storage of the hosted Supabase project, accessed through its PostgREST API."""
import typing

import httpx

from siagajiwa.api_clients.auxil.constants import SUPABASE_REST_PATH, DataDict
from siagajiwa.api_clients.auxil.models import NotificationParams
from siagajiwa.api_clients.base.base_api_client import BaseApiClient
from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.supabase.auth_client import AuthProvider
from siagajiwa.api_clients.supabase.exceptions import (
    SupabaseJSONParsingError,
    SupabaseRequestError,
)
from siagajiwa.auxil.constants import SUPABASE_ANON_KEY, SUPABASE_URL

Row = dict[str, typing.Any]


class SupabaseDatabaseClient(BaseApiClient):
    """Client for reading and writing rows of tables.

    Requests are made on behalf of the signed-in user if ``auth`` has a session,
    otherwise with the anonymous key (row-level security applies either way).
    """

    def __init__(
        self,
        auth: AuthProvider,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: typing.Any,
    ):
        super().__init__(http_client=http_client, **kwargs)
        self._auth = auth
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def select(
        self,
        table: str,
        filters: Row | None = None,
        order: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        """Returns rows of ``table`` whose columns are equal to the values in ``filters``."""
        params: DataDict = {"select": "*", **self._filter_params(filters)}
        if order is not None:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = limit

        try:
            _, data = await self.get(
                url=self._table_url(table),
                headers=self._headers(),
                params=params,
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Loaded rows of {table}"),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to load rows of {table}") from err

        return self._rows(table, data)

    async def insert(self, table: str, row: Row, upsert: bool = False) -> Row:
        """Inserts ``row`` into ``table`` and returns the row as stored.

        With ``upsert``, a row with the same primary key is overwritten instead of rejected,
        so the same write can be repeated.
        """
        prefer = "return=representation"
        if upsert:
            prefer = f"{prefer},resolution=merge-duplicates"

        try:
            _, data = await self.post(
                url=self._table_url(table),
                headers=self._headers(prefer=prefer),
                json_data=row,
                notification_params_for_status_code={
                    httpx.codes.CREATED: NotificationParams(f"Inserted a row into {table}"),
                    httpx.codes.OK: NotificationParams(f"Merged a row into {table}"),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to insert a row into {table}") from err

        rows = self._rows(table, data)
        if not rows:
            raise SupabaseJSONParsingError(f"Supabase returned no row after insert into {table}")
        return rows[0]

    async def update(self, table: str, values: Row, filters: Row) -> list[Row]:
        """Sets ``values`` on all rows of ``table`` matching ``filters``, returns updated rows."""
        if not filters:
            raise ValueError(f"Refusing to update all rows of {table}")

        try:
            _, data = await self.patch(
                url=self._table_url(table),
                headers=self._headers(prefer="return=representation"),
                params=self._filter_params(filters),
                json_data=values,
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Updated rows of {table}"),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to update rows of {table}") from err

        return self._rows(table, data)

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        session = self._auth.current_session()
        token = session.access_token if session is not None else self._api_key
        headers = {"apikey": self._api_key, "Authorization": f"Bearer {token}"}
        if prefer is not None:
            headers["Prefer"] = prefer
        return headers

    def _table_url(self, table: str) -> str:
        return f"{self._base_url}{SUPABASE_REST_PATH}/{table}"

    @staticmethod
    def _filter_params(filters: Row | None) -> DataDict:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    @staticmethod
    def _rows(table: str, data: typing.Any) -> list[Row]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise SupabaseJSONParsingError(f"Expected a list of rows of {table}, got {data=}")
        return data
