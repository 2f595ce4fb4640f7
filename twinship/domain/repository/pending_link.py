"""Pending invitation slot repository interface."""

from abc import ABC, abstractmethod

from twinship.domain.model.deep_link import PendingInvitation


class PendingLinkRepository(ABC):
    """Holds at most one pending invitation token.

    A newly routed invitation link overwrites whatever was there.
    """

    @abstractmethod
    async def get(self) -> PendingInvitation | None:
        """Return the pending slot, if filled."""
        pass

    @abstractmethod
    async def save(self, pending: PendingInvitation) -> PendingInvitation:
        """Fill the slot, replacing any previous token."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Empty the slot."""
        pass
