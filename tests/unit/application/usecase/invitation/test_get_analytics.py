"""Unit tests for GetAnalyticsUseCase."""

import pytest

from twinship.application.usecase.invitation import (
    CreateAndSendInvitationRequest,
    CreateAndSendInvitationUseCase,
    GetAnalyticsUseCase,
)
from twinship.domain.service import InvitationService
from twinship.domain.value import SendMethod
from twinship.util.clock import FrozenClock
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetAnalytics:
    """Tests for reading invitation analytics."""

    @pytest.mark.asyncio
    async def test_empty(self, unit_env):
        use_case = await unit_env.get(GetAnalyticsUseCase)

        response = await use_case.execute()

        assert response.total_sent == 0
        assert response.acceptance_rate == 0.0
        assert response.recent_invitations == []

    @pytest.mark.asyncio
    async def test_sent_and_accepted(self, unit_env):
        """Sent then accepted 30 minutes later."""
        # Arrange
        create_and_send = await unit_env.get(CreateAndSendInvitationUseCase)
        invitation_service = await unit_env.get(InvitationService)
        clock = await unit_env.get(FrozenClock)
        use_case = await unit_env.get(GetAnalyticsUseCase)
        sent = await create_and_send.execute(
            CreateAndSendInvitationRequest(
                inviter_name="Alex",
                recipient_email="jordan@example.com",
                method=SendMethod.EMAIL,
            )
        )
        clock.advance(minutes=30)
        await invitation_service.accept(sent.invitation.token)

        # Act
        response = await use_case.execute()

        # Assert
        assert response.total_sent == 1
        assert response.total_accepted == 1
        assert response.acceptance_rate == 100.0
        assert response.average_response_time == 1800.0
        assert response.recent_invitations[0].token == sent.invitation.token
