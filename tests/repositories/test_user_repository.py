import logging

import pytest

from siagajiwa.data_structures.models import UserProfile
from siagajiwa.repositories.user import ProfileNotFoundError, UserRepository
from tests.fakes import FakeAuth, FakeDatabase
from tests.rows import load_tables


async def test_sign_up_creates_profile():
    db = FakeDatabase()
    repository = UserRepository(db, FakeAuth())

    session = await repository.sign_up("new@example.com", "secret123", "Budi Santoso")

    assert repository.current_session() == session
    assert db.tables["profiles"] == [
        {"user_id": session.user_id, "email": "new@example.com", "full_name": "Budi Santoso"}
    ]


async def test_sign_up_succeeds_if_profile_creation_fails(caplog):
    db = FakeDatabase()
    db.failing_tables.add("profiles")
    repository = UserRepository(db, FakeAuth())

    with caplog.at_level(logging.ERROR):
        session = await repository.sign_up("new@example.com", "secret123", "Budi Santoso")

    assert session.email == "new@example.com"
    assert "profile creation failed" in caplog.text


async def test_sign_in_and_out():
    auth = FakeAuth()
    repository = UserRepository(FakeDatabase(), auth)

    await repository.sign_in("caregiver@example.com", "secret123")
    assert repository.current_session() is not None

    await repository.sign_out()
    assert repository.current_session() is None
    assert auth.signed_out


async def test_get_profile():
    repository = UserRepository(FakeDatabase(load_tables("profiles")), FakeAuth())

    profile = await repository.get_profile("user-1")

    assert profile == UserProfile(
        user_id="user-1",
        email="caregiver@example.com",
        full_name="Siti Rahma",
        knowledge_score=5,
        knowledge_percentage=50,
    )


async def test_missing_profile():
    with pytest.raises(ProfileNotFoundError):
        await UserRepository(FakeDatabase(), FakeAuth()).get_profile("user-9")


async def test_update_profile():
    db = FakeDatabase(load_tables("profiles"))
    repository = UserRepository(db, FakeAuth())
    profile = await repository.get_profile("user-1")

    profile.full_name = "Siti Rahmawati"
    await repository.update_profile(profile)

    row = db.tables["profiles"][0]
    assert row["full_name"] == "Siti Rahmawati"
    assert row["updated_at"]
    assert row["knowledge_score"] == 5
