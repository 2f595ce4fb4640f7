"""Repository implementations."""

from twinship.persistence.repository.invitation import KeyValueInvitationRepository
from twinship.persistence.repository.pending_link import (
    KeyValuePendingLinkRepository,
)

__all__ = [
    "KeyValueInvitationRepository",
    "KeyValuePendingLinkRepository",
]
