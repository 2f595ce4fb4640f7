"""Get invitation analytics use case."""

from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.service import AnalyticsAggregator


class GetAnalyticsResponse(BaseModel):
    """Invitation lifecycle statistics.

    ``acceptance_rate`` is a percentage and ``average_response_time`` is in
    seconds.
    """

    total_sent: int
    total_accepted: int
    total_declined: int
    total_expired: int
    acceptance_rate: float
    average_response_time: float
    recent_invitations: list[InvitationItem]


class GetAnalyticsUseCase(BaseUseCase):
    """Use case for reading invitation analytics."""

    def __init__(self, analytics_aggregator: AnalyticsAggregator) -> None:
        self.analytics_aggregator = analytics_aggregator

    async def execute(self, request: None = None) -> GetAnalyticsResponse:
        analytics = await self.analytics_aggregator.compute()
        return GetAnalyticsResponse(
            total_sent=analytics.total_sent,
            total_accepted=analytics.total_accepted,
            total_declined=analytics.total_declined,
            total_expired=analytics.total_expired,
            acceptance_rate=analytics.acceptance_rate,
            average_response_time=analytics.average_response_time,
            recent_invitations=[
                InvitationItem.from_invitation(inv)
                for inv in analytics.recent_invitations
            ],
        )
