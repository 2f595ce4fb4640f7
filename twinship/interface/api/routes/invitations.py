"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from twinship.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateAndSendInvitationRequest,
    CreateAndSendInvitationResponse,
    CreateAndSendInvitationUseCase,
    DeclineInvitationRequest,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
    GetAnalyticsResponse,
    GetAnalyticsUseCase,
    InvitationItem,
    MarkDeliveredRequest,
    MarkDeliveredUseCase,
    RetryInvitationRequest,
    RetryInvitationResponse,
    RetryInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from twinship.domain.value import DeliveryChannel

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class RetryInvitationAPIRequest(BaseModel):
    """API request for retrying an invitation."""

    channel: DeliveryChannel


@router.post(
    "",
    response_model=CreateAndSendInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invitation(
    request: CreateAndSendInvitationRequest,
    create_and_send_use_case: FromDishka[CreateAndSendInvitationUseCase],
) -> CreateAndSendInvitationResponse:
    """Create an invitation and send it over the requested channels.

    A 201 is returned once the invitation exists, even if no channel
    completed its send; ``success`` and ``message`` say what happened.
    """
    return await create_and_send_use_case.execute(request)


@router.get("/analytics", response_model=GetAnalyticsResponse)
async def get_analytics(
    analytics_use_case: FromDishka[GetAnalyticsUseCase],
) -> GetAnalyticsResponse:
    """Invitation lifecycle statistics."""
    return await analytics_use_case.execute()


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationRequest,
    accept_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Accept an invitation by deep-link token or manually entered code."""
    return await accept_use_case.execute(request)


@router.post("/decline", response_model=DeclineInvitationResponse)
async def decline_invitation(
    request: DeclineInvitationRequest,
    decline_use_case: FromDishka[DeclineInvitationUseCase],
) -> DeclineInvitationResponse:
    """Decline an invitation."""
    return await decline_use_case.execute(request)


@router.get("/{token}", response_model=ValidateInvitationResponse)
async def validate_invitation(
    token: str,
    validate_use_case: FromDishka[ValidateInvitationUseCase],
) -> ValidateInvitationResponse:
    """Preview an invitation before accepting it."""
    return await validate_use_case.execute(ValidateInvitationRequest(code=token))


@router.post("/{invitation_id}/retry", response_model=RetryInvitationResponse)
async def retry_invitation(
    invitation_id: UUID,
    request: RetryInvitationAPIRequest,
    retry_use_case: FromDishka[RetryInvitationUseCase],
) -> RetryInvitationResponse:
    """Re-send an invitation over one channel."""
    return await retry_use_case.execute(
        RetryInvitationRequest(invitation_id=invitation_id, channel=request.channel)
    )


@router.post("/{token}/delivered", response_model=InvitationItem)
async def mark_delivered(
    token: str,
    mark_delivered_use_case: FromDishka[MarkDeliveredUseCase],
) -> InvitationItem:
    """Record a delivery receipt for an invitation."""
    return await mark_delivered_use_case.execute(MarkDeliveredRequest(token=token))
