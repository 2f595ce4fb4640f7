"""Deep link routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from twinship.application.usecase.deep_link import (
    ClearPendingInvitationUseCase,
    GetPendingInvitationUseCase,
    HandleDeepLinkRequest,
    HandleDeepLinkResponse,
    HandleDeepLinkUseCase,
    PendingInvitationStatus,
    ProcessPendingInvitationResponse,
    ProcessPendingInvitationUseCase,
)

router = APIRouter(prefix="/deep-links", tags=["deep-links"], route_class=DishkaRoute)


@router.post("", response_model=HandleDeepLinkResponse)
async def handle_deep_link(
    request: HandleDeepLinkRequest,
    handle_deep_link_use_case: FromDishka[HandleDeepLinkUseCase],
) -> HandleDeepLinkResponse:
    """Route a URL opened by the host runtime.

    Unrecognized or malformed links come back as ``unknown``, never as an
    error.
    """
    return await handle_deep_link_use_case.execute(request)


@router.get("/pending", response_model=PendingInvitationStatus)
async def get_pending_invitation(
    pending_use_case: FromDishka[GetPendingInvitationUseCase],
) -> PendingInvitationStatus:
    """State of the pending invitation slot."""
    return await pending_use_case.execute()


@router.post("/pending/process", response_model=ProcessPendingInvitationResponse)
async def process_pending_invitation(
    process_use_case: FromDishka[ProcessPendingInvitationUseCase],
) -> ProcessPendingInvitationResponse:
    """Accept the invitation left pending by a deep link."""
    return await process_use_case.execute()


@router.delete("/pending", response_model=PendingInvitationStatus)
async def clear_pending_invitation(
    clear_use_case: FromDishka[ClearPendingInvitationUseCase],
) -> PendingInvitationStatus:
    """Discard the pending invitation slot."""
    return await clear_use_case.execute()
