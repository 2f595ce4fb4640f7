"""Channel dispatch domain service."""

from typing import Awaitable, TypeVar

import logfire

from twinship.domain.error import (
    ChannelUnavailableError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    TransportFailureError,
    ValidationError,
)
from twinship.domain.model.invitation import Invitation
from twinship.domain.value import (
    DeliveryChannel,
    EmailComposeStatus,
    InvitationStatus,
    SmsComposeStatus,
)
from twinship.util.templates import MessageRenderer

from .base import Service
from .invitation_service import InvitationService
from .transport import ChannelTransport

ComposeStatus = TypeVar("ComposeStatus", EmailComposeStatus, SmsComposeStatus)


class ChannelDispatcher(Service):
    """Sends invitations through the external channel transport.

    A send returns True only when the user-facing send action completed.
    Any failure before or during hand-off counts as a delivery attempt and
    is re-raised to the caller.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        transport: ChannelTransport,
        renderer: MessageRenderer,
    ) -> None:
        """Initialize channel dispatcher.

        Args:
            invitation_service: Lifecycle service recording outcomes
            transport: Email/SMS hand-off capability
            renderer: Message template renderer
        """
        self.invitation_service = invitation_service
        self.transport = transport
        self.renderer = renderer

    async def send(self, invitation: Invitation, channel: DeliveryChannel) -> bool:
        """Send over a single named channel."""
        if channel == DeliveryChannel.EMAIL:
            return await self.send_email(invitation)
        return await self.send_sms(invitation)

    async def send_email(self, invitation: Invitation) -> bool:
        """Compose and hand off an invitation email.

        A draft saved by the user keeps the invitation pending; a cancelled
        compose sheet changes nothing.

        Raises:
            ValidationError: No recipient email on the invitation
            ChannelUnavailableError: Email cannot be composed here
            TransportFailureError: The hand-off failed
        """
        with logfire.span(
            "channel_dispatcher.send_email", invitation_id=str(invitation.id)
        ):
            invitation = await self._current(invitation)
            try:
                if not invitation.recipient_email:
                    raise ValidationError("No email address provided")
                if not await self.transport.is_email_available():
                    raise ChannelUnavailableError(DeliveryChannel.EMAIL.value)
                status = await self._hand_off(
                    DeliveryChannel.EMAIL,
                    self.transport.compose_email(
                        invitation.recipient_email,
                        self.renderer.email_subject(invitation),
                        self.renderer.email_body(invitation),
                    ),
                )
            except DomainError as e:
                await self._record_failure(invitation, DeliveryChannel.EMAIL, e)
                raise

            logfire.info(
                "Email compose finished",
                invitation_id=str(invitation.id),
                status=status.value,
            )
            if status == EmailComposeStatus.SENT:
                await self.invitation_service.mark_sent(invitation.id)
                return True
            if status == EmailComposeStatus.SAVED:
                await self.invitation_service.mark_draft_saved(invitation.id)
            return False

    async def send_sms(self, invitation: Invitation) -> bool:
        """Compose and hand off an invitation text message.

        Raises:
            ValidationError: No recipient phone on the invitation
            ChannelUnavailableError: SMS cannot be composed here
            TransportFailureError: The hand-off failed
        """
        with logfire.span(
            "channel_dispatcher.send_sms", invitation_id=str(invitation.id)
        ):
            invitation = await self._current(invitation)
            try:
                if not invitation.recipient_phone:
                    raise ValidationError("No phone number provided")
                if not await self.transport.is_sms_available():
                    raise ChannelUnavailableError(DeliveryChannel.SMS.value)
                status = await self._hand_off(
                    DeliveryChannel.SMS,
                    self.transport.compose_sms(
                        invitation.recipient_phone,
                        self.renderer.sms_body(invitation),
                    ),
                )
            except DomainError as e:
                await self._record_failure(invitation, DeliveryChannel.SMS, e)
                raise

            logfire.info(
                "SMS compose finished",
                invitation_id=str(invitation.id),
                status=status.value,
            )
            if status == SmsComposeStatus.SENT:
                await self.invitation_service.mark_sent(invitation.id)
                return True
            return False

    async def _current(self, invitation: Invitation) -> Invitation:
        # Re-read so a send never goes out for an invitation that already
        # reached a terminal state
        current = await self.invitation_service.get_by_id(invitation.id)
        if current is None:
            raise NotFoundError("Invitation", str(invitation.id))
        if current.status.is_terminal:
            raise InvalidTransitionError(
                str(current.id), current.status.value, InvitationStatus.SENT.value
            )
        return current

    async def _hand_off(
        self, channel: DeliveryChannel, compose: Awaitable[ComposeStatus]
    ) -> ComposeStatus:
        try:
            return await compose
        except DomainError:
            raise
        except Exception as e:
            raise TransportFailureError(channel.value, str(e)) from e

    async def _record_failure(
        self, invitation: Invitation, channel: DeliveryChannel, error: DomainError
    ) -> None:
        logfire.warn(
            "Invitation send failed",
            invitation_id=str(invitation.id),
            channel=channel.value,
            error_code=error.code,
            error=str(error),
        )
        await self.invitation_service.record_failed_attempt(invitation.id)
