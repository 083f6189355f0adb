import asyncio
import logging
import typing

import httpx
from httpx import Response

from siagajiwa.api_clients.auxil.constants import (
    BASE_TIMEOUT_IN_SECS_BETWEEN_API_REQUEST_ATTEMPTS,
    MAX_ATTEMPTS_TO_GET_DATA_FROM_API,
    REQUEST_TIMEOUT_IN_SECS,
    DataDict,
)
from siagajiwa.api_clients.auxil.enums import HttpMethod
from siagajiwa.api_clients.auxil.models import NotificationParamsForStatusCode
from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.auxil.constants import CALLER_LOGGING_STACK_LEVEL
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.enums import LoggingLevel

logger = logging.getLogger(__name__)

RETRIABLE_STATUS_CODES = (
    httpx.codes.INTERNAL_SERVER_ERROR,
    httpx.codes.BAD_GATEWAY,
    httpx.codes.SERVICE_UNAVAILABLE,
    httpx.codes.GATEWAY_TIMEOUT,
)


class BaseApiClient:
    """Base class for clients of external services.

    An ``httpx.AsyncClient`` can be passed in to share a connection pool or to substitute
    the transport in tests. If none is passed, a new client is created for every request.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_timeout_between_attempts: float = BASE_TIMEOUT_IN_SECS_BETWEEN_API_REQUEST_ATTEMPTS,
        max_attempts: int = MAX_ATTEMPTS_TO_GET_DATA_FROM_API,
    ):
        self._http_client = http_client
        self._base_timeout_between_attempts = base_timeout_between_attempts
        self._max_attempts = max_attempts

    async def get(
        self,
        url: str,
        notification_params_for_status_code: NotificationParamsForStatusCode,
        headers: dict[str, str] | None = None,
        params: DataDict | None = None,
    ) -> tuple[int, typing.Any]:
        """Makes a GET request, returns a tuple containing status code and JSON data.

        Note:
            Only pass **informative** status codes in ``notification_params_for_status_code``.
            E.g. If ``404 NOT FOUND`` means something relevant, pass it in, along with
            notification parameters (message and logging level). For all other cases,
            let the API client raise its own exception and handle it accordingly.
        """
        return await self._make_request_and_get_data(
            method=HttpMethod.GET,
            url=url,
            headers=headers,
            params=params,
            notification_params_for_status_code=notification_params_for_status_code,
        )

    async def patch(
        self,
        url: str,
        notification_params_for_status_code: NotificationParamsForStatusCode,
        json_data: DataDict,
        headers: dict[str, str] | None = None,
        params: DataDict | None = None,
    ) -> tuple[int, typing.Any]:
        """Makes a PATCH request with JSON body, returns a tuple containing status code and
        JSON data (``None`` if the response has no body).
        """
        return await self._make_request_and_get_data(
            method=HttpMethod.PATCH,
            url=url,
            headers=headers,
            json_data=json_data,
            params=params,
            notification_params_for_status_code=notification_params_for_status_code,
        )

    async def post(
        self,
        url: str,
        notification_params_for_status_code: NotificationParamsForStatusCode,
        headers: dict[str, str] | None = None,
        data: DataDict | None = None,
        json_data: DataDict | list[DataDict] | None = None,
        params: DataDict | None = None,
    ) -> tuple[int, typing.Any]:
        """Makes a POST request, returns a tuple containing status code and JSON data.

        The ``data`` parameter is passed as ``data``, ``json_data`` as ``json`` to
        httpx client. You can pass either one of them, but not both at the same time.

        Note:
            Only pass **informative** status codes in ``notification_params_for_status_code``.
            See ``get()``.
        """
        if data is None and json_data is None:
            raise TypeError("Either `data` or `json_data` must be provided. You passed nothing.")

        if data is not None and json_data is not None:
            raise TypeError("Either `data` or `json_data` must be provided, not both.")

        return await self._make_request_and_get_data(
            method=HttpMethod.POST,
            url=url,
            headers=headers,
            data=data,
            json_data=json_data,
            params=params,
            notification_params_for_status_code=notification_params_for_status_code,
        )

    async def _make_request_and_get_data(
        self,
        method: HttpMethod,
        url: str,
        notification_params_for_status_code: NotificationParamsForStatusCode,
        headers: dict[str, str] | None = None,
        data: DataDict | None = None,
        json_data: DataDict | list[DataDict] | None = None,
        params: DataDict | None = None,
    ) -> tuple[int, typing.Any]:
        response = await self._make_request_with_retries(
            method=method,
            url=url,
            headers=headers,
            data=data,
            json_data=json_data,
            params=params,
        )

        try:
            status_code, received_json = self._get_status_code_and_json(response)
        except ValueError as err:
            raise BaseApiClientError(f"Could not load JSON from response to {url}") from err

        try:
            notification_params = notification_params_for_status_code[status_code]
        except KeyError as err:
            raise BaseApiClientError(
                f"Unexpected {status_code=} after sending a {method.upper()} "
                f"request to {url}. JSON data received: {received_json}"
            ) from err

        logs(
            level=notification_params.logging_level,
            text=notification_params.message,
            # API client creates one additional layer between caller and logger
            stacklevel=CALLER_LOGGING_STACK_LEVEL + 2,
        )

        return status_code, received_json

    async def _make_request_with_retries(
        self,
        method: HttpMethod,
        url: str,
        headers: dict[str, str] | None = None,
        data: DataDict | None = None,
        json_data: DataDict | list[DataDict] | None = None,
        params: DataDict | None = None,
    ) -> Response:
        attempts = 0
        timeout = self._base_timeout_between_attempts

        while True:
            try:
                response = await self._make_one_request(
                    method=method,
                    url=url,
                    headers=headers,
                    data=data,
                    json_data=json_data,
                    params=params,
                )
            except (NotImplementedError, httpx.TransportError) as err:
                raise BaseApiClientError(
                    f"Failed to send {method.upper()} request to {url=}"
                ) from err

            if response.status_code not in RETRIABLE_STATUS_CODES:
                return response

            attempts += 1
            if attempts >= self._max_attempts:
                raise BaseApiClientError(f"Failed to reach {url} after {attempts} attempts.")

            self._log_retry(
                url=url,
                method=method,
                status_code=response.status_code,
                attempts=attempts,
                timeout=timeout,
            )

            await asyncio.sleep(timeout)
            timeout *= 2

    async def _make_one_request(
        self,
        method: HttpMethod,
        url: str,
        headers: dict[str, str] | None = None,
        data: DataDict | None = None,
        json_data: DataDict | list[DataDict] | None = None,
        params: DataDict | None = None,
    ) -> Response:
        if method not in (HttpMethod.GET, HttpMethod.PATCH, HttpMethod.POST):
            raise NotImplementedError(f"{method=} not supported")

        if self._http_client is not None:
            response = await self._send(
                self._http_client, method, url, headers, data, json_data, params
            )
        else:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_IN_SECS) as client:
                response = await self._send(client, method, url, headers, data, json_data, params)

        logger.debug(f"Sent {method.upper()} request to {url=}. {response.status_code=}.")
        return response

    @staticmethod
    async def _send(
        client: httpx.AsyncClient,
        method: HttpMethod,
        url: str,
        headers: dict[str, str] | None,
        data: DataDict | None,
        json_data: DataDict | list[DataDict] | None,
        params: DataDict | None,
    ) -> Response:
        if method == HttpMethod.GET:
            return await client.get(url, headers=headers, params=params)
        if method == HttpMethod.PATCH:
            return await client.patch(url, headers=headers, params=params, json=json_data)
        return await client.post(url, headers=headers, params=params, data=data, json=json_data)

    def _log_retry(
        self,
        url: str,
        method: HttpMethod,
        status_code: int,
        timeout: float,
        attempts: int,
    ) -> None:
        if attempts == 1:
            logs(
                text=(
                    f"Failed to reach {url=} with {method=} ({status_code=}). "
                    f"Will try {self._max_attempts - attempts} times before failing"
                ),
                level=LoggingLevel.WARNING,
            )
            return

        logs(
            text=(
                f"Failed to reach {url=} with {method=} ({status_code=}). "
                f"Next attempt in {timeout} seconds "
                f"({self._max_attempts - attempts} attempts left)."
            ),
            level=LoggingLevel.WARNING,
        )

    @staticmethod
    def _get_status_code_and_json(response: Response) -> tuple[int, typing.Any]:
        status_code = response.status_code
        if not response.content:
            return status_code, None

        try:
            response_json = response.json()
        except ValueError as err:
            raise ValueError(
                f"Response contains no JSON. Response status code: {status_code}"
            ) from err

        logger.debug(f"JSON: {response_json}")
        return status_code, response_json

    @staticmethod
    def _get_value(data: DataDict, key: str) -> typing.Any:
        try:
            return data[key]
        except (KeyError, TypeError) as err:
            raise BaseApiClientError(f"Key {key!r} not found in {data=}") from err
