"""Unit tests for ChannelDispatcher."""

import pytest

from twinship.adapter.channel import MockChannelTransport
from twinship.domain.error import (
    ChannelUnavailableError,
    InvalidTransitionError,
    TransportFailureError,
    ValidationError,
)
from twinship.domain.service import ChannelDispatcher, InvitationService
from twinship.domain.value import (
    DeliveryChannel,
    EmailComposeStatus,
    InvitationStatus,
    SmsComposeStatus,
)
from twinship.util.clock import FrozenClock
from tests.conftest import make_contact, make_inviter
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSendEmail:
    """Tests for send_email method."""

    @pytest.mark.asyncio
    async def test_sent_email_marks_invitation_sent(self, unit_env):
        """A completed send returns True and moves the invitation to sent."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(name="Alex"), make_contact(email="jordan@example.com")
        )

        # Act
        sent = await dispatcher.send_email(invitation)

        # Assert
        assert sent is True
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.SENT

        [message] = transport.sent_to(DeliveryChannel.EMAIL)
        assert message.recipient == "jordan@example.com"
        assert "Twinship" in message.subject
        assert "Alex" in message.body
        assert invitation.token.root in message.body
        assert invitation.deep_link in message.body

    @pytest.mark.asyncio
    async def test_saved_draft_keeps_invitation_pending(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        clock = await unit_env.get(FrozenClock)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        transport.script_email(EmailComposeStatus.SAVED)

        # Act
        sent = await dispatcher.send_email(invitation)

        # Assert
        assert sent is False
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING
        assert stored.last_attempt_at == clock.now()
        assert stored.attempt_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_compose_changes_nothing(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        transport.script_email(EmailComposeStatus.CANCELLED)

        sent = await dispatcher.send_email(invitation)

        assert sent is False
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored == invitation

    @pytest.mark.asyncio
    async def test_unavailable_email_counts_as_failed_attempt(self, unit_env):
        """Channel unavailability is raised and recorded as an attempt."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        transport.email_available = False
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )

        # Act & Assert
        with pytest.raises(ChannelUnavailableError):
            await dispatcher.send_email(invitation)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 1
        assert stored.status == InvitationStatus.PENDING
        assert transport.messages == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_reraised_and_counted(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        transport.script_email(TransportFailureError("email", "connection refused"))

        with pytest.raises(TransportFailureError):
            await dispatcher.send_email(invitation)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 1

    @pytest.mark.asyncio
    async def test_unexpected_transport_error_becomes_transport_failure(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        transport.script_email(RuntimeError("compose sheet crashed"))

        with pytest.raises(TransportFailureError, match="compose sheet crashed"):
            await dispatcher.send_email(invitation)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 1

    @pytest.mark.asyncio
    async def test_missing_email_address_raises_validation_error(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact(email=None, phone="+15551234567")
        )

        with pytest.raises(ValidationError, match="No email address provided"):
            await dispatcher.send_email(invitation)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 1

    @pytest.mark.asyncio
    async def test_terminal_invitation_is_never_sent(self, unit_env):
        """Sends re-read the invitation and refuse terminal ones."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.accept(invitation.token)

        # Act & Assert
        with pytest.raises(InvalidTransitionError):
            await dispatcher.send_email(invitation)

        assert transport.messages == []
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert stored.attempt_count == 0


class TestSendSms:
    """Tests for send_sms method."""

    @pytest.mark.asyncio
    async def test_sent_sms_marks_invitation_sent(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(name="Sam"), make_contact(email=None, phone="+15551234567")
        )

        # Act
        sent = await dispatcher.send(invitation, DeliveryChannel.SMS)

        # Assert
        assert sent is True
        [message] = transport.sent_to(DeliveryChannel.SMS)
        assert message.recipient == "+15551234567"
        assert message.subject is None
        assert "Sam invited you to Twinship" in message.body
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.SENT

    @pytest.mark.asyncio
    async def test_failed_sms_returns_false(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact(email=None, phone="+15551234567")
        )
        transport.script_sms(SmsComposeStatus.FAILED)

        sent = await dispatcher.send_sms(invitation)

        assert sent is False
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_unavailable_sms_raises_error(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        dispatcher = await unit_env.get(ChannelDispatcher)
        transport = await unit_env.get(MockChannelTransport)
        transport.sms_available = False
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact(phone="+15551234567")
        )

        with pytest.raises(ChannelUnavailableError):
            await dispatcher.send_sms(invitation)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 1
