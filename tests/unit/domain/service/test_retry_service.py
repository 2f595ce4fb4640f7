"""Unit tests for RetryManager."""

from uuid import uuid4

import pytest

from twinship.adapter.channel import MockChannelTransport
from twinship.domain.error import (
    AlreadyAcceptedError,
    InvitationDeclinedError,
    InvitationExpiredError,
    MaxAttemptsExceededError,
    NotFoundError,
    TransportFailureError,
)
from twinship.domain.service import InvitationService, RetryManager
from twinship.domain.value import DeliveryChannel, InvitationId, InvitationStatus
from twinship.util.clock import FrozenClock
from tests.conftest import make_contact, make_inviter
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRetry:
    """Tests for retry method."""

    @pytest.mark.asyncio
    async def test_retry_sends_invitation(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )

        # Act
        sent = await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

        # Assert
        assert sent is True
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.SENT

    @pytest.mark.asyncio
    async def test_retry_refused_after_three_failed_attempts(self, unit_env):
        """Once attempt_count reaches the cap no further send is made."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        transport = await unit_env.get(MockChannelTransport)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        transport.script_email(
            *[TransportFailureError("email", "timeout") for _ in range(3)]
        )
        for _ in range(3):
            with pytest.raises(TransportFailureError):
                await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

        # Act & Assert
        with pytest.raises(MaxAttemptsExceededError):
            await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.attempt_count == 3
        assert len(transport.messages) == 3

    @pytest.mark.asyncio
    async def test_retry_unknown_invitation_raises_not_found(self, unit_env):
        retry_manager = await unit_env.get(RetryManager)

        with pytest.raises(NotFoundError):
            await retry_manager.retry(InvitationId(uuid4()), DeliveryChannel.EMAIL)

    @pytest.mark.asyncio
    async def test_retry_after_expiry_marks_expired(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        transport = await unit_env.get(MockChannelTransport)
        clock = await unit_env.get(FrozenClock)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        clock.advance(days=8)

        # Act & Assert
        with pytest.raises(InvitationExpiredError):
            await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert transport.messages == []

    @pytest.mark.asyncio
    async def test_retry_accepted_invitation_raises_error(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.accept(invitation.token)

        with pytest.raises(AlreadyAcceptedError):
            await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

    @pytest.mark.asyncio
    async def test_retry_declined_invitation_raises_error(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.decline(invitation.token)

        with pytest.raises(InvitationDeclinedError):
            await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)

    @pytest.mark.asyncio
    async def test_attempt_cap_is_checked_before_expiry(self, unit_env):
        """An exhausted invitation reports the cap even once overdue."""
        invitation_service = await unit_env.get(InvitationService)
        retry_manager = await unit_env.get(RetryManager)
        clock = await unit_env.get(FrozenClock)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        for _ in range(3):
            await invitation_service.record_failed_attempt(invitation.id)
        clock.advance(days=8)

        with pytest.raises(MaxAttemptsExceededError):
            await retry_manager.retry(invitation.id, DeliveryChannel.EMAIL)
