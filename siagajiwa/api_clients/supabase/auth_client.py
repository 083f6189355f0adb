"""Authentication against the hosted Supabase project (GoTrue REST API).

Callers depend on the ``AuthProvider`` protocol and receive an implementation in their
constructor, so tests can substitute a fake and nothing holds a process-wide client.
"""
import typing
from typing import Protocol

import httpx

from siagajiwa.api_clients.auxil.constants import (
    SUPABASE_AUTH_PATH_LOGOUT,
    SUPABASE_AUTH_PATH_RECOVER,
    SUPABASE_AUTH_PATH_SIGNUP,
    SUPABASE_AUTH_PATH_TOKEN,
    DataDict,
)
from siagajiwa.api_clients.auxil.models import NotificationParams
from siagajiwa.api_clients.base.base_api_client import BaseApiClient
from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.supabase.exceptions import (
    AuthConfirmationRequiredError,
    AuthRejectedError,
    AuthValidationError,
    SupabaseJSONParsingError,
    SupabaseRequestError,
)
from siagajiwa.auxil.constants import (
    EMAIL_PATTERN,
    MIN_PASSWORD_LENGTH,
    SUPABASE_ANON_KEY,
    SUPABASE_URL,
)
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.enums import LoggingLevel
from siagajiwa.data_structures.models import Session


class AuthProvider(Protocol):
    async def sign_in_with_email(self, email: str, password: str) -> Session:
        ...

    async def sign_up_with_email(self, email: str, password: str) -> Session:
        ...

    async def sign_out(self) -> None:
        ...

    async def reset_password(self, email: str) -> None:
        ...

    def current_session(self) -> Session | None:
        ...


class SupabaseAuthClient(BaseApiClient):
    """Client for e-mail/password authentication. Keeps the current session in memory."""

    def __init__(
        self,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: typing.Any,
    ):
        super().__init__(http_client=http_client, **kwargs)
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._session: Session | None = None

    def current_session(self) -> Session | None:
        return self._session

    async def sign_in_with_email(self, email: str, password: str) -> Session:
        self._validate_credentials(email, password)

        try:
            status_code, data = await self.post(
                url=f"{self._base_url}{SUPABASE_AUTH_PATH_TOKEN}",
                headers=self._headers(),
                params={"grant_type": "password"},
                json_data={"email": email, "password": password},
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Signed in {email}"),
                    httpx.codes.BAD_REQUEST: NotificationParams(
                        f"Supabase rejected credentials of {email}", LoggingLevel.WARNING
                    ),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to sign in {email}") from err

        if status_code != httpx.codes.OK:
            raise AuthRejectedError(self._error_message(data, "Invalid email or password"))

        self._session = self._session_from_data(data)
        return self._session

    async def sign_up_with_email(self, email: str, password: str) -> Session:
        self._validate_credentials(email, password, is_new_account=True)

        try:
            status_code, data = await self.post(
                url=f"{self._base_url}{SUPABASE_AUTH_PATH_SIGNUP}",
                headers=self._headers(),
                json_data={"email": email, "password": password},
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Signed up {email}"),
                    httpx.codes.BAD_REQUEST: NotificationParams(
                        f"Supabase rejected sign-up of {email}", LoggingLevel.WARNING
                    ),
                    httpx.codes.UNPROCESSABLE_ENTITY: NotificationParams(
                        f"Supabase rejected sign-up of {email}", LoggingLevel.WARNING
                    ),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to sign up {email}") from err

        if status_code != httpx.codes.OK:
            raise AuthRejectedError(self._error_message(data, "Email already registered"))

        if not isinstance(data, dict) or "access_token" not in data:
            raise AuthConfirmationRequiredError(
                f"Account for {email} was created but has to be confirmed before signing in"
            )

        self._session = self._session_from_data(data)
        return self._session

    async def sign_out(self) -> None:
        session, self._session = self._session, None
        if session is None:
            return

        try:
            await self.post(
                url=f"{self._base_url}{SUPABASE_AUTH_PATH_LOGOUT}",
                headers=self._headers(session.access_token),
                json_data={},
                notification_params_for_status_code={
                    httpx.codes.NO_CONTENT: NotificationParams(f"Signed out {session.email}"),
                    # token already expired: the session is gone on the server anyway
                    httpx.codes.UNAUTHORIZED: NotificationParams(
                        f"Session of {session.email} had already expired"
                    ),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to sign out {session.email}") from err

    async def reset_password(self, email: str) -> None:
        """Asks Supabase to send a password reset link to ``email``."""
        if not self._is_valid_email(email):
            raise AuthValidationError("Invalid email format")

        try:
            await self.post(
                url=f"{self._base_url}{SUPABASE_AUTH_PATH_RECOVER}",
                headers=self._headers(),
                json_data={"email": email},
                notification_params_for_status_code={
                    httpx.codes.OK: NotificationParams(f"Sent password reset link to {email}"),
                },
            )
        except BaseApiClientError as err:
            raise SupabaseRequestError(f"Failed to request password reset for {email}") from err

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
        }

    @classmethod
    def _validate_credentials(
        cls, email: str, password: str, is_new_account: bool = False
    ) -> None:
        if not email.strip() or not password.strip():
            raise AuthValidationError("Email and password must not be empty")

        if not cls._is_valid_email(email):
            raise AuthValidationError("Invalid email format")

        if is_new_account and len(password) < MIN_PASSWORD_LENGTH:
            raise AuthValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

    @staticmethod
    def _is_valid_email(email: str) -> bool:
        return EMAIL_PATTERN.fullmatch(email.strip()) is not None

    @staticmethod
    def _error_message(data: typing.Any, default: str) -> str:
        if isinstance(data, dict):
            for key in ("error_description", "msg", "message"):
                if data.get(key):
                    return str(data[key])
        return default

    @classmethod
    def _session_from_data(cls, data: DataDict) -> Session:
        try:
            user = cls._get_value(data, "user")
            session = Session(
                access_token=cls._get_value(data, "access_token"),
                user_id=cls._get_value(user, "id"),
                email=user.get("email"),
                refresh_token=data.get("refresh_token"),
                expires_in=data.get("expires_in"),
            )
        except BaseApiClientError as err:
            raise SupabaseJSONParsingError(f"Could not parse Supabase session {data=}") from err

        logs(text=f"Received session for user {session.user_id}")
        return session
