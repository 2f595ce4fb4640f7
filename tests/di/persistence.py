"""Mock persistence providers for testing."""

from dishka import Scope, provide

from twinship.domain.repository import InvitationRepository, PendingLinkRepository
from twinship.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryPendingLinkRepository,
)
from twinship.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope is per test: every test builds its own container, so each
    test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_pending_link_repository(self) -> PendingLinkRepository:
        """Provide in-memory pending slot repository."""
        return InMemoryPendingLinkRepository()
