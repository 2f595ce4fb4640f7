"""Create and send invitation use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.error import DomainError, StorageFailureError, ValidationError
from twinship.domain.model.invitation import Invitation
from twinship.domain.model.outcome import DispatchOutcome
from twinship.domain.service import ChannelDispatcher, InvitationService
from twinship.domain.value import (
    DeliveryChannel,
    InviterProfile,
    RecipientContact,
    SendMethod,
)

CHANNEL_LABELS = {DeliveryChannel.EMAIL: "Email", DeliveryChannel.SMS: "SMS"}


class CreateAndSendInvitationRequest(BaseModel):
    """Request to create an invitation and send it."""

    inviter_name: str
    twin_type: str | None = None
    accent_color: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    recipient_name: str | None = None
    method: SendMethod


class CreateAndSendInvitationResponse(BaseModel):
    """Result of creating and sending an invitation.

    ``message`` carries the combined, human-readable channel errors, prefixed
    with "Partially sent: " when at least one channel succeeded.
    """

    outcome: DispatchOutcome
    success: bool
    invitation: InvitationItem
    message: str | None = None
    errors: list[str] = []


class CreateAndSendInvitationUseCase(BaseUseCase):
    """Use case for the main invitation flow.

    Creates the invitation, then tries each requested channel the recipient
    can be reached on, email first. Overall success is true if any channel
    completed its send.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        dispatcher: ChannelDispatcher,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation lifecycle service
            dispatcher: Channel dispatcher
        """
        self.invitation_service = invitation_service
        self.dispatcher = dispatcher

    async def execute(
        self, request: CreateAndSendInvitationRequest
    ) -> CreateAndSendInvitationResponse:
        """Create and send an invitation.

        Raises:
            RateLimitExceededError: Too many invitations created recently
            ValidationError: Contact details missing or malformed
        """
        with logfire.span("create_and_send_invitation.execute", method=request.method.value):
            try:
                inviter = InviterProfile(
                    name=request.inviter_name,
                    twin_type=request.twin_type,
                    accent_color=request.accent_color,
                )
            except PydanticValidationError:
                raise ValidationError("Inviter name is required")

            invitation = await self.invitation_service.create_invitation(
                inviter,
                RecipientContact(
                    email=request.recipient_email,
                    phone=request.recipient_phone,
                    name=request.recipient_name,
                ),
            )

            success = False
            errors: list[str] = []
            for channel in request.method.channels:
                if not self._reachable(invitation, channel):
                    continue
                label = CHANNEL_LABELS[channel]
                try:
                    if await self.dispatcher.send(invitation, channel):
                        success = True
                    else:
                        errors.append(f"{label} invitation could not be sent")
                except StorageFailureError:
                    raise
                except DomainError as e:
                    errors.append(f"{label} error: {e}")

            current = await self.invitation_service.get_by_id(invitation.id) or invitation

            if success:
                message = f"Partially sent: {', '.join(errors)}" if errors else None
                outcome = DispatchOutcome.SENT
            else:
                message = ", ".join(errors) or "Failed to send invitation"
                outcome = DispatchOutcome.FAILED

            logfire.info(
                "Invitation send finished",
                invitation_id=str(invitation.id),
                outcome=outcome.value,
                error_count=len(errors),
            )
            return CreateAndSendInvitationResponse(
                outcome=outcome,
                success=success,
                invitation=InvitationItem.from_invitation(current),
                message=message,
                errors=errors,
            )

    @staticmethod
    def _reachable(invitation: Invitation, channel: DeliveryChannel) -> bool:
        if channel == DeliveryChannel.EMAIL:
            return bool(invitation.recipient_email)
        return bool(invitation.recipient_phone)
