"""Delivery retry policy."""

import logfire

from twinship.config import InvitationSettings
from twinship.domain.error import (
    AlreadyAcceptedError,
    InvitationDeclinedError,
    InvitationExpiredError,
    MaxAttemptsExceededError,
    NotFoundError,
)
from twinship.domain.value import DeliveryChannel, InvitationId, InvitationStatus
from twinship.util.clock import Clock

from .base import Service
from .dispatch_service import ChannelDispatcher
from .invitation_service import InvitationService


class RetryManager(Service):
    """Governs re-send attempts against the attempt cap and the expiry."""

    def __init__(
        self,
        invitation_service: InvitationService,
        dispatcher: ChannelDispatcher,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> None:
        self.invitation_service = invitation_service
        self.dispatcher = dispatcher
        self.clock = clock
        self.max_attempts = invitation_settings.max_attempts

    async def retry(self, invitation_id: InvitationId, channel: DeliveryChannel) -> bool:
        """Re-send an invitation over one channel.

        Preconditions are checked in order: the invitation exists, the attempt
        cap is not reached, the invitation has not expired, and it is not
        already accepted or declined.

        Returns:
            Whether the send action completed

        Raises:
            NotFoundError: Unknown invitation
            MaxAttemptsExceededError: attempt_count reached the cap
            InvitationExpiredError: Past expires_at or already expired
            AlreadyAcceptedError: Already redeemed
            InvitationDeclinedError: Declined by the recipient
        """
        with logfire.span(
            "retry_manager.retry",
            invitation_id=str(invitation_id),
            channel=channel.value,
        ):
            invitation = await self.invitation_service.get_by_id(invitation_id)
            if invitation is None:
                raise NotFoundError("Invitation", str(invitation_id))

            if invitation.attempt_count >= self.max_attempts:
                logfire.warn(
                    "Retry refused, attempt cap reached",
                    invitation_id=str(invitation_id),
                    attempt_count=invitation.attempt_count,
                )
                raise MaxAttemptsExceededError(str(invitation_id), self.max_attempts)

            if invitation.status == InvitationStatus.EXPIRED:
                raise InvitationExpiredError(str(invitation_id))
            if invitation.is_expired(self.clock.now()):
                await self.invitation_service.mark_expired(invitation_id)
                raise InvitationExpiredError(str(invitation_id))

            if invitation.status == InvitationStatus.ACCEPTED:
                raise AlreadyAcceptedError(str(invitation_id))
            if invitation.status == InvitationStatus.DECLINED:
                raise InvitationDeclinedError(str(invitation_id))

            return await self.dispatcher.send(invitation, channel)
