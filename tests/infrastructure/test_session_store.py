"""Session Store — in-memory and SQLAlchemy-backed key-value storage."""

import pytest

from notesync.infrastructure.session_store import InMemorySessionStore, SqlSessionStore


@pytest.fixture
async def sql_store():
    store = await SqlSessionStore.open("sqlite+aiosqlite:///:memory:")
    yield store
    await store.close()


@pytest.fixture(params=["memory", "sql"])
async def any_store(request, sql_store):
    if request.param == "memory":
        return InMemorySessionStore()
    return sql_store


async def test_missing_key_is_none(any_store):
    assert await any_store.get("token") is None


async def test_set_then_get(any_store):
    await any_store.set("token", "abc")
    assert await any_store.get("token") == "abc"


async def test_set_overwrites(any_store):
    await any_store.set("token", "abc")
    await any_store.set("token", "def")
    assert await any_store.get("token") == "def"


async def test_delete_removes(any_store):
    await any_store.set("token", "abc")
    await any_store.delete("token")
    assert await any_store.get("token") is None


async def test_delete_missing_is_noop(any_store):
    await any_store.delete("token")


async def test_sql_store_survives_reopen(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'session.db'}"
    first = await SqlSessionStore.open(url)
    await first.set("token", "persisted")
    await first.close()

    second = await SqlSessionStore.open(url)
    try:
        assert await second.get("token") == "persisted"
    finally:
        await second.close()
