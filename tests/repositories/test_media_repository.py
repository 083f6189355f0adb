import pytest

from siagajiwa.api_clients.supabase.exceptions import SupabaseJSONParsingError
from siagajiwa.repositories.media import MediaRepository
from tests.fakes import FakeDatabase
from tests.rows import load_tables


async def test_patient_care_media_of_one_folder_in_order():
    db = FakeDatabase(load_tables("pp_media"))

    items = await MediaRepository(db).get_patient_care_media("skizofrenia")

    assert [item.id for item in items] == [1, 3]
    assert items[0].link == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert items[0].video is None
    assert db.selects[0]["filters"] == {"folder": "skizofrenia"}


async def test_stress_media():
    db = FakeDatabase(load_tables("stress_media"))
    items = await MediaRepository(db).get_stress_media()
    assert [item.order for item in items] == [1, 2]
    assert db.selects[0]["order"] == "order"


async def test_schizophrenia_media_without_rows():
    assert await MediaRepository(FakeDatabase()).get_schizophrenia_media() == ()


async def test_row_without_link():
    db = FakeDatabase({"skizo_media": [{"id": 1, "order": 1}]})
    with pytest.raises(SupabaseJSONParsingError):
        await MediaRepository(db).get_schizophrenia_media()
