"""In-memory pending link repository for testing."""

from typing import Optional

from twinship.domain.model.deep_link import PendingInvitation
from twinship.domain.repository.pending_link import PendingLinkRepository


class InMemoryPendingLinkRepository(PendingLinkRepository):
    """In-memory implementation of PendingLinkRepository for testing."""

    def __init__(self) -> None:
        self._pending: Optional[PendingInvitation] = None

    async def get(self) -> Optional[PendingInvitation]:
        """Return the pending slot."""
        return self._pending

    async def save(self, pending: PendingInvitation) -> PendingInvitation:
        """Overwrite the pending slot."""
        self._pending = pending
        return pending

    async def clear(self) -> None:
        """Empty the slot."""
        self._pending = None
