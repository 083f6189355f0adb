from siagajiwa.api_clients.supabase.database_client import Row, SupabaseDatabaseClient
from siagajiwa.api_clients.supabase.exceptions import SupabaseJSONParsingError
from siagajiwa.data_structures.enums import MediaCategory
from siagajiwa.data_structures.models import MediaItem


class MediaRepository:
    """Links to educational videos, in the order they are shown in the app."""

    def __init__(self, db: SupabaseDatabaseClient):
        self._db = db

    async def get_stress_media(self) -> tuple[MediaItem, ...]:
        return await self._get_media(MediaCategory.STRESS)

    async def get_patient_care_media(self, patient_type: str) -> tuple[MediaItem, ...]:
        """Gets patient care videos from the folder for ``patient_type``."""
        return await self._get_media(MediaCategory.PATIENT_CARE, {"folder": patient_type})

    async def get_schizophrenia_media(self) -> tuple[MediaItem, ...]:
        return await self._get_media(MediaCategory.SCHIZOPHRENIA)

    async def _get_media(
        self, category: MediaCategory, filters: Row | None = None
    ) -> tuple[MediaItem, ...]:
        rows = await self._db.select(category.value, filters=filters, order="order")
        try:
            return tuple(
                MediaItem(
                    id=row["id"],
                    link=row["link"],
                    order=row["order"],
                    created_at=row.get("created_at"),
                )
                for row in rows
            )
        except KeyError as err:
            raise SupabaseJSONParsingError(f"Could not parse rows of {category.value}") from err
