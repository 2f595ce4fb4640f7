"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from twinship.domain.model.invitation import Invitation
from twinship.domain.value import InvitationId, InvitationStatus, InvitationToken


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Holds the authoritative copy of every invitation. Implementations raise
    StorageFailureError on I/O problems and never retry internally.
    """

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Append a new invitation.

        Args:
            invitation: The invitation to store

        Returns:
            The stored invitation
        """
        pass

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when a recipient opens an invitation link or enters the code.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus, at: datetime
    ) -> Invitation | None:
        """Set status and stamp last_attempt_at.

        Args:
            invitation_id: Invitation to update
            status: New status
            at: Timestamp recorded as last_attempt_at

        Returns:
            The updated invitation, or None if it does not exist
        """
        pass

    @abstractmethod
    async def increment_attempt(
        self, invitation_id: InvitationId, at: datetime
    ) -> Invitation | None:
        """Record a failed delivery attempt.

        Args:
            invitation_id: Invitation to update
            at: Timestamp recorded as last_attempt_at

        Returns:
            The updated invitation, or None if it does not exist
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Invitation]:
        """Return every stored invitation in insertion order."""
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created strictly after ``since``.

        Used by the creation rate limiter.
        """
        pass

    @abstractmethod
    async def prune(self, now: datetime, retention: timedelta) -> int:
        """Expire stale pending invitations, then drop old records.

        Pending invitations past their expiry are relabelled expired first
        (stamping ``last_attempt_at``); afterwards every record created before
        ``now - retention`` is removed.

        Args:
            now: Current time
            retention: How long records are kept

        Returns:
            Number of records removed
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove all invitation data."""
        pass
