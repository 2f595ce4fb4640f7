"""Key-value implementation of the pending link repository."""

from typing import Optional

from twinship.domain.model.deep_link import PendingInvitation
from twinship.domain.repository.pending_link import PendingLinkRepository
from twinship.persistence.mappers import json_to_pending, pending_to_json
from twinship.persistence.store import KeyValueStore


class KeyValuePendingLinkRepository(PendingLinkRepository):
    """Keeps the pending-token slot under one well-known key."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key

    async def get(self) -> Optional[PendingInvitation]:
        return json_to_pending(await self.store.get_item(self.key))

    async def save(self, pending: PendingInvitation) -> PendingInvitation:
        await self.store.set_item(self.key, pending_to_json(pending))
        return pending

    async def clear(self) -> None:
        await self.store.remove_item(self.key)
