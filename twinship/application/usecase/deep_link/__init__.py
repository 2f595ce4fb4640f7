"""Deep link use cases."""

from twinship.application.usecase.deep_link.handle_deep_link import (
    HandleDeepLinkRequest,
    HandleDeepLinkResponse,
    HandleDeepLinkUseCase,
)
from twinship.application.usecase.deep_link.pending_invitation import (
    ClearPendingInvitationUseCase,
    GetPendingInvitationUseCase,
    PendingInvitationStatus,
    ProcessPendingInvitationResponse,
    ProcessPendingInvitationUseCase,
)

__all__ = [
    "ClearPendingInvitationUseCase",
    "GetPendingInvitationUseCase",
    "HandleDeepLinkRequest",
    "HandleDeepLinkResponse",
    "HandleDeepLinkUseCase",
    "PendingInvitationStatus",
    "ProcessPendingInvitationResponse",
    "ProcessPendingInvitationUseCase",
]
