from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.core.errors import AlreadyExists, InvalidCredentials, InvalidSession
from src.core.security import get_password_hash, session_expired, verify_password
from src.repositories.memory import MemoryStore
from src.services.auth import AuthService

from conftest import RacingStore


def test_password_hashing():
    hashed = get_password_hash("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_session_expired():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert not session_expired(now - timedelta(hours=23), 24, now=now)
    assert session_expired(now - timedelta(hours=25), 24, now=now)
    # naive timestamps are read as UTC
    assert session_expired(datetime(2024, 4, 30, 11, 0), 24, now=now)
    assert not session_expired(datetime(2024, 5, 1, 11, 0), 24, now=now)


@pytest.mark.asyncio
async def test_register_login_resolve_logout():
    auth = AuthService(MemoryStore())
    first = await auth.register("alice", "pw")
    assert await auth.resolve(first.id) == "alice"

    second = await auth.login("alice", "pw")
    assert second.id != first.id
    with pytest.raises(InvalidSession):
        await auth.resolve(first.id)

    await auth.logout(second.id)
    with pytest.raises(InvalidSession):
        await auth.resolve(second.id)
    await auth.logout(None)


@pytest.mark.asyncio
async def test_register_and_login_failures():
    auth = AuthService(MemoryStore())
    await auth.register("alice", "pw")

    with pytest.raises(AlreadyExists):
        await auth.register("alice", "other")
    with pytest.raises(InvalidCredentials):
        await auth.register("", "pw")
    with pytest.raises(InvalidCredentials):
        await auth.login("alice", "wrong")
    with pytest.raises(InvalidCredentials):
        await auth.login("nobody", "pw")
    with pytest.raises(InvalidSession):
        await auth.resolve(None)
    with pytest.raises(InvalidSession):
        await auth.resolve("unknown")


@pytest.mark.asyncio
async def test_expired_session_is_rejected_and_removed():
    store = MemoryStore()
    auth = AuthService(store, session_ttl_hours=1)
    record = await auth.register("alice", "pw")

    stale = record.model_copy(update={"created_at": record.created_at - timedelta(hours=2)})
    store._sessions[record.id] = stale

    with pytest.raises(InvalidSession, match="expired"):
        await auth.resolve(record.id)
    assert await store.session_get(record.id) is None


@pytest.mark.asyncio
async def test_login_retries_after_concurrent_session_insert():
    store = RacingStore(races=0)
    auth = AuthService(store)
    await auth.register("alice", "pw")

    store.races = 1
    record = await auth.login("alice", "pw")
    assert await auth.resolve(record.id) == "alice"


@pytest.mark.asyncio
async def test_login_gives_up_after_second_conflict():
    store = RacingStore(races=0)
    auth = AuthService(store)
    await auth.register("alice", "pw")

    store.races = 2
    with pytest.raises(AlreadyExists):
        await auth.login("alice", "pw")


@pytest.mark.asyncio
async def test_register_rejects_blank_credentials():
    auth = AuthService(MemoryStore())
    with pytest.raises(InvalidCredentials):
        await auth.register("   ", " ")
    with pytest.raises(InvalidCredentials):
        await auth.register("bob", "  ")
