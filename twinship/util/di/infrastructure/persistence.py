"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from twinship.config import Settings
from twinship.domain.repository import InvitationRepository, PendingLinkRepository
from twinship.persistence.database import (
    create_engine,
    create_session_factory,
    ensure_schema,
)
from twinship.persistence.repository import (
    KeyValueInvitationRepository,
    KeyValuePendingLinkRepository,
)
from twinship.persistence.store import KeyValueStore, SqlKeyValueStore
from twinship.util.di.base import ProviderBase
from twinship.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using the SQL key-value store."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine.

        SQLite databases get their schema created on first use; other
        databases are migrated with Alembic.
        """
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        if settings.storage.url.startswith("sqlite"):
            await ensure_schema(engine)
        yield engine
        await engine.dispose()
        logfire.info("Storage engine disposed")

    @provide
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide
    def get_key_value_store(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> KeyValueStore:
        """Provide durable key-value store."""
        return SqlKeyValueStore(session_factory)

    @provide
    def get_invitation_repository(
        self, store: KeyValueStore, settings: Settings
    ) -> InvitationRepository:
        """Provide Invitation repository."""
        return KeyValueInvitationRepository(store, settings.storage.invitations_key)

    @provide
    def get_pending_link_repository(
        self, store: KeyValueStore, settings: Settings
    ) -> PendingLinkRepository:
        """Provide pending invitation slot repository."""
        return KeyValuePendingLinkRepository(store, settings.storage.pending_link_key)
