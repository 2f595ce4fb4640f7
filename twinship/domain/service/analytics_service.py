"""Invitation analytics domain service."""

from datetime import timedelta

import logfire

from twinship.config import InvitationSettings
from twinship.domain.model.analytics import InvitationAnalytics
from twinship.domain.model.invitation import Invitation
from twinship.domain.repository import InvitationRepository
from twinship.domain.value import InvitationStatus
from twinship.util.clock import Clock

from .base import Service

# A record counts as sent once at least one channel attempt succeeded
SENT_STATUSES = frozenset(
    {InvitationStatus.SENT, InvitationStatus.ACCEPTED, InvitationStatus.DECLINED}
)


class AnalyticsAggregator(Service):
    """Computes lifecycle statistics over the repository on demand."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> None:
        self.invitation_repository = invitation_repository
        self.clock = clock
        self.recent_window = timedelta(days=invitation_settings.recent_window_days)
        self.recent_limit = invitation_settings.recent_limit

    async def compute(self) -> InvitationAnalytics:
        """Aggregate counts, acceptance rate, response time and recent activity."""
        with logfire.span("analytics_aggregator.compute"):
            invitations = await self.invitation_repository.list_all()

            total_sent = sum(1 for inv in invitations if inv.status in SENT_STATUSES)
            accepted = [
                inv for inv in invitations if inv.status == InvitationStatus.ACCEPTED
            ]
            total_declined = self._count(invitations, InvitationStatus.DECLINED)
            total_expired = self._count(invitations, InvitationStatus.EXPIRED)

            acceptance_rate = (
                len(accepted) / total_sent * 100 if total_sent > 0 else 0.0
            )

            analytics = InvitationAnalytics(
                total_sent=total_sent,
                total_accepted=len(accepted),
                total_declined=total_declined,
                total_expired=total_expired,
                acceptance_rate=acceptance_rate,
                average_response_time=self._average_response_time(accepted),
                recent_invitations=self._recent(invitations),
            )
            logfire.info(
                "Invitation analytics computed",
                total=len(invitations),
                total_sent=total_sent,
                acceptance_rate=acceptance_rate,
            )
            return analytics

    @staticmethod
    def _count(invitations: list[Invitation], status: InvitationStatus) -> int:
        return sum(1 for inv in invitations if inv.status == status)

    @staticmethod
    def _average_response_time(accepted: list[Invitation]) -> float:
        # last_attempt_at is stamped by the accept transition
        durations = [
            ((inv.last_attempt_at or inv.created_at) - inv.created_at).total_seconds()
            for inv in accepted
        ]
        if not durations:
            return 0.0
        return sum(durations) / len(durations)

    def _recent(self, invitations: list[Invitation]) -> list[Invitation]:
        since = self.clock.now() - self.recent_window
        recent = [inv for inv in invitations if inv.created_at > since]
        recent.sort(key=lambda inv: inv.created_at, reverse=True)
        return recent[: self.recent_limit]
