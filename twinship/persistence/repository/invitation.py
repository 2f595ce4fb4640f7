"""Key-value implementation of Invitation repository."""

import asyncio
from datetime import datetime, timedelta
from typing import Callable, Optional

from twinship.domain.model.invitation import Invitation
from twinship.domain.repository.invitation import InvitationRepository
from twinship.domain.value import InvitationId, InvitationStatus, InvitationToken
from twinship.persistence.mappers import invitations_to_json, json_to_invitations
from twinship.persistence.store import KeyValueStore


class KeyValueInvitationRepository(InvitationRepository):
    """Stores every invitation as one JSON array under a well-known key.

    Each mutation is a read-modify-write of the whole array and runs under
    a single writer lock owned by the repository.
    """

    def __init__(self, store: KeyValueStore, key: str) -> None:
        """Initialize repository.

        Args:
            store: Durable key-value store
            key: Key holding the invitation array
        """
        self.store = store
        self.key = key
        self._write_lock = asyncio.Lock()

    async def create(self, invitation: Invitation) -> Invitation:
        """Append an invitation to the stored array."""
        async with self._write_lock:
            invitations = await self._load()
            invitations.append(invitation)
            await self._store(invitations)
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        for invitation in await self._load():
            if invitation.id == invitation_id:
                return invitation
        return None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by token."""
        for invitation in await self._load():
            if invitation.token == token:
                return invitation
        return None

    async def update_status(
        self, invitation_id: InvitationId, status: InvitationStatus, at: datetime
    ) -> Optional[Invitation]:
        """Set status and stamp last_attempt_at; no-op if the ID is unknown."""
        return await self._replace(
            invitation_id, lambda inv: {"status": status, "last_attempt_at": at}
        )

    async def increment_attempt(
        self, invitation_id: InvitationId, at: datetime
    ) -> Optional[Invitation]:
        """Bump attempt_count and stamp last_attempt_at."""
        return await self._replace(
            invitation_id,
            lambda inv: {"attempt_count": inv.attempt_count + 1, "last_attempt_at": at},
        )

    async def list_all(self) -> list[Invitation]:
        """Return every stored invitation."""
        return await self._load()

    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created after ``since``."""
        return sum(1 for inv in await self._load() if inv.created_at > since)

    async def prune(self, now: datetime, retention: timedelta) -> int:
        """Expire stale pending invitations, then drop records past retention."""
        cutoff = now - retention
        async with self._write_lock:
            invitations = await self._load()
            kept = []
            for invitation in invitations:
                if (
                    invitation.status == InvitationStatus.PENDING
                    and invitation.is_expired(now)
                ):
                    invitation = invitation.model_copy(
                        update={
                            "status": InvitationStatus.EXPIRED,
                            "last_attempt_at": now,
                        }
                    )
                if invitation.created_at > cutoff:
                    kept.append(invitation)
            await self._store(kept)
        return len(invitations) - len(kept)

    async def clear(self) -> None:
        """Remove the invitation array."""
        async with self._write_lock:
            await self.store.remove_item(self.key)

    async def _load(self) -> list[Invitation]:
        return json_to_invitations(await self.store.get_item(self.key))

    async def _store(self, invitations: list[Invitation]) -> None:
        await self.store.set_item(self.key, invitations_to_json(invitations))

    async def _replace(
        self, invitation_id: InvitationId, changes: Callable[[Invitation], dict]
    ) -> Optional[Invitation]:
        async with self._write_lock:
            invitations = await self._load()
            for i, existing in enumerate(invitations):
                if existing.id == invitation_id:
                    updated = existing.model_copy(update=changes(existing))
                    invitations[i] = updated
                    await self._store(invitations)
                    return updated
        return None
