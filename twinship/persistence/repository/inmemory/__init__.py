"""In-memory repository implementations for testing."""

from twinship.persistence.repository.inmemory.invitation import (
    InMemoryInvitationRepository,
)
from twinship.persistence.repository.inmemory.pending_link import (
    InMemoryPendingLinkRepository,
)

__all__ = [
    "InMemoryInvitationRepository",
    "InMemoryPendingLinkRepository",
]
