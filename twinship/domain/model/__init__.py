"""Domain models for Twinship."""

from twinship.domain.model.analytics import InvitationAnalytics
from twinship.domain.model.deep_link import (
    AssessmentLink,
    ChatLink,
    DeepLinkIntent,
    DeepLinkStatus,
    InvitationLink,
    PendingInvitation,
    ProfileLink,
    UnknownLink,
)
from twinship.domain.model.invitation import Invitation, InvitationMetadata
from twinship.domain.model.outcome import DispatchOutcome, DispatchResult

__all__ = [
    "AssessmentLink",
    "ChatLink",
    "DeepLinkIntent",
    "DeepLinkStatus",
    "DispatchOutcome",
    "DispatchResult",
    "Invitation",
    "InvitationAnalytics",
    "InvitationLink",
    "InvitationMetadata",
    "PendingInvitation",
    "ProfileLink",
    "UnknownLink",
]
