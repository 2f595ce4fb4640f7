"""In-memory invitation repository for testing."""

from datetime import datetime, timedelta
from typing import Optional

from twinship.domain.model.invitation import Invitation
from twinship.domain.repository.invitation import InvitationRepository
from twinship.domain.value import InvitationId, InvitationStatus, InvitationToken


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: list[Invitation] = []

    async def create(self, invitation: Invitation) -> Invitation:
        """Append an invitation."""
        self._invitations.append(invitation)
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        for invitation in self._invitations:
            if invitation.id == invitation_id:
                return invitation
        return None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self._invitations:
            if invitation.token == token:
                return invitation
        return None

    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus, at: datetime
    ) -> Optional[Invitation]:
        """Set status and stamp last_attempt_at."""
        return self._replace(
            invitation_id, lambda inv: {"status": status, "last_attempt_at": at}
        )

    async def increment_attempt(
        self, invitation_id: InvitationId, at: datetime
    ) -> Optional[Invitation]:
        """Bump attempt_count and stamp last_attempt_at."""
        return self._replace(
            invitation_id,
            lambda inv: {"attempt_count": inv.attempt_count + 1, "last_attempt_at": at},
        )

    async def list_all(self) -> list[Invitation]:
        """Return all invitations."""
        return list(self._invitations)

    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created after ``since``."""
        return sum(1 for inv in self._invitations if inv.created_at > since)

    async def prune(self, now: datetime, retention: timedelta) -> int:
        """Expire stale pending invitations and drop old ones."""
        cutoff = now - retention
        kept = []
        for invitation in self._invitations:
            if invitation.status == InvitationStatus.PENDING and invitation.is_expired(
                now
            ):
                invitation = invitation.model_copy(
                    update={
                        "status": InvitationStatus.EXPIRED,
                        "last_attempt_at": now,
                    }
                )
            if invitation.created_at > cutoff:
                kept.append(invitation)

        removed = len(self._invitations) - len(kept)
        self._invitations = kept
        return removed

    async def clear(self) -> None:
        """Remove everything."""
        self._invitations = []

    def _replace(self, invitation_id: InvitationId, changes) -> Optional[Invitation]:
        for i, existing in enumerate(self._invitations):
            if existing.id == invitation_id:
                updated = existing.model_copy(update=changes(existing))
                self._invitations[i] = updated
                return updated
        return None
