"""Result type for lifecycle operations that may legitimately do nothing."""

from enum import Enum
from typing import Optional

from twinship.domain.model.common import DomainModel
from twinship.domain.model.invitation import Invitation


class DispatchOutcome(str, Enum):
    """What an invitation operation actually did."""

    SENT = "sent"
    DECLINED = "declined"
    ALREADY_HANDLED = "already_handled"
    FAILED = "failed"


class DispatchResult(DomainModel):
    """Outcome of a decline, with the reason when nothing was done."""

    outcome: DispatchOutcome
    invitation: Optional[Invitation] = None
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """Whether the caller's intent was carried out."""
        return self.outcome in (DispatchOutcome.SENT, DispatchOutcome.DECLINED)
