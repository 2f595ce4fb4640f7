"""Invitation creation rate limiting."""

import asyncio
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator

import logfire

from twinship.config import InvitationSettings
from twinship.domain.error import RateLimitExceededError, StorageFailureError
from twinship.domain.repository import InvitationRepository
from twinship.util.clock import Clock

from .base import Service


class RateLimiter(Service):
    """Bounds invitation creation per rolling time window.

    The limiter fails closed: if the window cannot be counted, creation is
    denied.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize rate limiter.

        Args:
            invitation_repository: Invitation repository
            clock: Time source
            invitation_settings: Window length and limit
        """
        self.invitation_repository = invitation_repository
        self.clock = clock
        self.window = timedelta(seconds=invitation_settings.rate_limit_window_seconds)
        self.limit = invitation_settings.max_invites_per_window
        self._lock = asyncio.Lock()

    async def can_create(self) -> bool:
        """Check whether another invitation fits in the current window."""
        since = self.clock.now() - self.window
        try:
            recent = await self.invitation_repository.count_created_since(since)
        except StorageFailureError as e:
            logfire.error("Rate limit check failed, denying creation", error=str(e))
            return False

        allowed = recent < self.limit
        if not allowed:
            logfire.warn("Rate limit reached", recent=recent, limit=self.limit)
        return allowed

    @asynccontextmanager
    async def reserve(self) -> AsyncIterator[None]:
        """Hold the creation slot while a new invitation is stored.

        The window is counted and the record written under one lock, so
        concurrent creations cannot both see room for a single slot.

        Raises:
            RateLimitExceededError: If the window is full
        """
        async with self._lock:
            if not await self.can_create():
                raise RateLimitExceededError(self.limit, int(self.window.total_seconds()))
            yield
