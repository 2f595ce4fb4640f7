"""Invitation use cases."""

from twinship.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.application.usecase.invitation.create_and_send import (
    CreateAndSendInvitationRequest,
    CreateAndSendInvitationResponse,
    CreateAndSendInvitationUseCase,
)
from twinship.application.usecase.invitation.decline_invitation import (
    DeclineInvitationRequest,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
)
from twinship.application.usecase.invitation.get_analytics import (
    GetAnalyticsResponse,
    GetAnalyticsUseCase,
)
from twinship.application.usecase.invitation.mark_delivered import (
    MarkDeliveredRequest,
    MarkDeliveredUseCase,
)
from twinship.application.usecase.invitation.retry_invitation import (
    RetryInvitationRequest,
    RetryInvitationResponse,
    RetryInvitationUseCase,
)
from twinship.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CreateAndSendInvitationRequest",
    "CreateAndSendInvitationResponse",
    "CreateAndSendInvitationUseCase",
    "DeclineInvitationRequest",
    "DeclineInvitationResponse",
    "DeclineInvitationUseCase",
    "GetAnalyticsResponse",
    "GetAnalyticsUseCase",
    "InvitationItem",
    "MarkDeliveredRequest",
    "MarkDeliveredUseCase",
    "RetryInvitationRequest",
    "RetryInvitationResponse",
    "RetryInvitationUseCase",
    "ValidateInvitationRequest",
    "ValidateInvitationResponse",
    "ValidateInvitationUseCase",
]
