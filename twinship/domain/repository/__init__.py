"""Repository interfaces for the Twinship domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from twinship.domain.repository.invitation import InvitationRepository
from twinship.domain.repository.pending_link import PendingLinkRepository

__all__ = [
    "InvitationRepository",
    "PendingLinkRepository",
]
