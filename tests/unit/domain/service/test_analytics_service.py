"""Unit tests for AnalyticsAggregator."""

import pytest

from twinship.domain.service import AnalyticsAggregator, InvitationService
from twinship.util.clock import FrozenClock
from tests.conftest import make_contact, make_inviter
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCompute:
    """Tests for compute method."""

    @pytest.mark.asyncio
    async def test_empty_repository(self, unit_env):
        """No invitations means zero everywhere, never a division error."""
        analytics_aggregator = await unit_env.get(AnalyticsAggregator)

        analytics = await analytics_aggregator.compute()

        assert analytics.total_sent == 0
        assert analytics.total_accepted == 0
        assert analytics.acceptance_rate == 0.0
        assert analytics.average_response_time == 0.0
        assert analytics.recent_invitations == []

    @pytest.mark.asyncio
    async def test_single_accepted_invitation(self, unit_env):
        """One invitation sent and accepted an hour later."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        analytics_aggregator = await unit_env.get(AnalyticsAggregator)
        clock = await unit_env.get(FrozenClock)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.mark_sent(invitation.id)
        clock.advance(hours=1)
        await invitation_service.accept(invitation.token)

        # Act
        analytics = await analytics_aggregator.compute()

        # Assert
        assert analytics.total_sent == 1
        assert analytics.total_accepted == 1
        assert analytics.acceptance_rate == 100.0
        assert analytics.average_response_time == 3600.0
        assert [inv.id for inv in analytics.recent_invitations] == [invitation.id]

    @pytest.mark.asyncio
    async def test_mixed_outcomes(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        analytics_aggregator = await unit_env.get(AnalyticsAggregator)
        accepted, sent, declined, expired = [
            await invitation_service.create_invitation(make_inviter(), make_contact())
            for _ in range(4)
        ]
        await invitation_service.accept(accepted.token)
        await invitation_service.mark_sent(sent.id)
        await invitation_service.decline(declined.token)
        await invitation_service.mark_expired(expired.id)

        # Act
        analytics = await analytics_aggregator.compute()

        # Assert
        assert analytics.total_sent == 3
        assert analytics.total_accepted == 1
        assert analytics.total_declined == 1
        assert analytics.total_expired == 1
        assert analytics.acceptance_rate == pytest.approx(100 / 3)

    @pytest.mark.asyncio
    async def test_recent_invitations_window(self, unit_env):
        """Only invitations from the last 7 days are listed, newest first."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        analytics_aggregator = await unit_env.get(AnalyticsAggregator)
        clock = await unit_env.get(FrozenClock)
        await invitation_service.create_invitation(make_inviter(), make_contact())
        clock.advance(days=8)
        older = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        clock.advance(hours=2)
        newer = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )

        # Act
        analytics = await analytics_aggregator.compute()

        # Assert
        assert [inv.id for inv in analytics.recent_invitations] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_recent_invitations_are_capped(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        analytics_aggregator = await unit_env.get(AnalyticsAggregator)
        clock = await unit_env.get(FrozenClock)
        for _ in range(12):
            await invitation_service.create_invitation(make_inviter(), make_contact())
            clock.advance(minutes=15)

        analytics = await analytics_aggregator.compute()

        assert len(analytics.recent_invitations) == 10
