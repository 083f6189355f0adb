import logging
from datetime import datetime, timezone

from siagajiwa.api_clients.base.exceptions import BaseApiClientError
from siagajiwa.api_clients.supabase.auth_client import AuthProvider
from siagajiwa.api_clients.supabase.database_client import SupabaseDatabaseClient
from siagajiwa.api_clients.supabase.exceptions import SupabaseJSONParsingError
from siagajiwa.auxil.logs import logs
from siagajiwa.data_structures.constants import TABLE_PROFILES
from siagajiwa.data_structures.enums import LoggingLevel
from siagajiwa.data_structures.models import Session, UserProfile

logger = logging.getLogger(__name__)


class ProfileNotFoundError(SupabaseJSONParsingError):
    pass


class UserRepository:
    """Accounts (delegated to ``AuthProvider``) and profiles of caregivers."""

    def __init__(self, db: SupabaseDatabaseClient, auth: AuthProvider):
        self._db = db
        self._auth = auth

    def current_session(self) -> Session | None:
        return self._auth.current_session()

    async def sign_in(self, email: str, password: str) -> Session:
        return await self._auth.sign_in_with_email(email, password)

    async def sign_up(self, email: str, password: str, full_name: str) -> Session:
        """Creates the account and its profile.

        If the account was created but the profile wasn't, the user can still sign in,
        so the failure is only logged.
        """
        session = await self._auth.sign_up_with_email(email, password)

        try:
            await self._db.insert(
                TABLE_PROFILES,
                {"user_id": session.user_id, "email": email, "full_name": full_name},
            )
        except BaseApiClientError as err:
            logs(
                text=(
                    f"Account created but profile creation failed, "
                    f"profile has to be created manually: {err}"
                ),
                level=LoggingLevel.ERROR,
                user_id=session.user_id,
            )
        else:
            logs(text="Profile created", user_id=session.user_id)

        return session

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    async def get_profile(self, user_id: str) -> UserProfile:
        rows = await self._db.select(TABLE_PROFILES, filters={"user_id": user_id}, limit=1)
        if not rows:
            raise ProfileNotFoundError(f"No profile found for {user_id=}")

        row = rows[0]
        try:
            return UserProfile(
                user_id=row["user_id"],
                email=row["email"],
                full_name=row.get("full_name"),
                avatar_url=row.get("avatar_url"),
                knowledge_score=row.get("knowledge_score"),
                knowledge_percentage=row.get("knowledge_percentage"),
            )
        except KeyError as err:
            raise SupabaseJSONParsingError(f"Could not parse profile {row=}") from err

    async def update_profile(self, profile: UserProfile) -> None:
        await self._db.update(
            TABLE_PROFILES,
            {
                "full_name": profile.full_name,
                "avatar_url": profile.avatar_url,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
            filters={"user_id": profile.user_id},
        )
        logger.info(f"Updated profile of user {profile.user_id}")
