"""Durable key-value store.

Mirrors the host platform's key-value storage: string keys mapping to
string documents. Repositories serialize their state as JSON under one
well-known key each.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

import logfire
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from twinship.domain.error import StorageFailureError
from twinship.persistence.tables import key_value_store_table


class KeyValueStore(ABC):
    """String-keyed document store."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the document stored under ``key``, or None."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous document."""
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and ephemeral runs."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """SQL implementation over the key_value_store table.

    Each call runs in its own short transaction. Database errors surface as
    StorageFailureError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        stmt = select(key_value_store_table.c.value).where(
            key_value_store_table.c.key == key
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logfire.error("Key-value read failed", key=key, error=str(e))
            raise StorageFailureError("read", str(e)) from e

    async def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        update(key_value_store_table)
                        .where(key_value_store_table.c.key == key)
                        .values(value=value, updated_at=now)
                    )
                    if result.rowcount == 0:
                        await session.execute(
                            insert(key_value_store_table).values(
                                key=key, value=value, updated_at=now
                            )
                        )
        except SQLAlchemyError as e:
            logfire.error("Key-value write failed", key=key, error=str(e))
            raise StorageFailureError("write", str(e)) from e

    async def remove_item(self, key: str) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(key_value_store_table).where(
                            key_value_store_table.c.key == key
                        )
                    )
        except SQLAlchemyError as e:
            logfire.error("Key-value delete failed", key=key, error=str(e))
            raise StorageFailureError("delete", str(e)) from e
