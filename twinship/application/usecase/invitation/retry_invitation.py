"""Retry invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.error import NotFoundError
from twinship.domain.service import InvitationService, RetryManager
from twinship.domain.value import DeliveryChannel, InvitationId


class RetryInvitationRequest(BaseModel):
    """Retry invitation request."""

    invitation_id: UUID
    channel: DeliveryChannel


class RetryInvitationResponse(BaseModel):
    """Retry invitation response."""

    sent: bool
    invitation: InvitationItem
    remaining_attempts: int


class RetryInvitationUseCase(BaseUseCase):
    """Use case for re-sending an invitation over one channel."""

    def __init__(
        self,
        invitation_service: InvitationService,
        retry_manager: RetryManager,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation lifecycle service
            retry_manager: Retry policy service
        """
        self.invitation_service = invitation_service
        self.retry_manager = retry_manager

    async def execute(self, request: RetryInvitationRequest) -> RetryInvitationResponse:
        """Retry sending an invitation.

        Transport failures are counted against the attempt cap and re-raised.

        Raises:
            NotFoundError: Unknown invitation
            MaxAttemptsExceededError: Attempt cap reached
            InvitationExpiredError: Invitation expired
            ChannelUnavailableError: Channel not available
            TransportFailureError: Hand-off failed
        """
        invitation_id = InvitationId(request.invitation_id)
        with logfire.span(
            "retry_invitation.execute",
            invitation_id=str(invitation_id),
            channel=request.channel.value,
        ):
            sent = await self.retry_manager.retry(invitation_id, request.channel)

            invitation = await self.invitation_service.get_by_id(invitation_id)
            if invitation is None:
                raise NotFoundError("Invitation", str(invitation_id))

            return RetryInvitationResponse(
                sent=sent,
                invitation=InvitationItem.from_invitation(invitation),
                remaining_attempts=max(
                    self.retry_manager.max_attempts - invitation.attempt_count, 0
                ),
            )
