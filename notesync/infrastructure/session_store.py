"""Session Store — process-wide key-value storage for the session token.

Invariants:
    - get() of a missing key returns None (never raises)
    - delete() of a missing key is a no-op
    - SqlSessionStore survives process restarts; InMemorySessionStore does not

Design Decisions:
    - Key-value table over a dedicated token column: the token lives under one fixed key
    - Upsert via session.merge(): insert-or-update without a separate existence check
"""

import logging

from sqlalchemy import String, Text, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from notesync.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


class ClientBase(DeclarativeBase):
    """Client-side tables, kept apart from the reference server schema."""
    pass


class KeyValueEntry(ClientBase):
    """One persisted client setting."""
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class InMemorySessionStore:
    """Dict-backed store for tests and short-lived processes."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlSessionStore:
    """Key-value store persisted through SQLAlchemy (SQLite by default)."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    @classmethod
    async def open(cls, database_url: str) -> "SqlSessionStore":
        """Create the manager and make sure the table exists."""
        db = DatabaseSessionManager(database_url)
        await db.create_all(ClientBase.metadata)
        return cls(db)

    async def close(self) -> None:
        await self._db.dispose()

    async def get(self, key: str) -> str | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(KeyValueEntry.value).where(KeyValueEntry.key == key),
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        async with self._db.session() as session:
            await session.merge(KeyValueEntry(key=key, value=value))
            await session.commit()
        logger.debug(f"Stored session key '{key}'")

    async def delete(self, key: str) -> None:
        async with self._db.session() as session:
            entry = await session.get(KeyValueEntry, key)
            if entry is None:
                return
            await session.delete(entry)
            await session.commit()
        logger.debug(f"Deleted session key '{key}'")
