"""Invitation lifecycle statistics."""

from twinship.domain.model.common import DomainModel
from twinship.domain.model.invitation import Invitation


class InvitationAnalytics(DomainModel):
    """Aggregate view over all stored invitations.

    ``acceptance_rate`` is a percentage; ``average_response_time`` is in
    seconds and measured from creation to acceptance.
    """

    total_sent: int = 0
    total_accepted: int = 0
    total_declined: int = 0
    total_expired: int = 0
    acceptance_rate: float = 0.0
    average_response_time: float = 0.0
    recent_invitations: list[Invitation] = []
