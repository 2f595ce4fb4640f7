"""Decline invitation use case."""

import logfire
from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.model.outcome import DispatchOutcome
from twinship.domain.service import DeepLinkRouter, InvitationService


class DeclineInvitationRequest(BaseModel):
    """Decline invitation request."""

    code: str


class DeclineInvitationResponse(BaseModel):
    """Decline invitation response.

    ``outcome`` is ``declined`` when this call declined the invitation and
    ``already_handled`` when there was nothing left to decline; ``reason``
    then says why (``not_found``, ``accepted``, ``declined``, ``expired``).
    """

    outcome: DispatchOutcome
    success: bool
    reason: str | None = None
    invitation: InvitationItem | None = None


class DeclineInvitationUseCase(BaseUseCase):
    """Use case for declining an invitation."""

    def __init__(
        self, invitation_service: InvitationService, deep_link_router: DeepLinkRouter
    ) -> None:
        self.invitation_service = invitation_service
        self.deep_link_router = deep_link_router

    async def execute(
        self, request: DeclineInvitationRequest
    ) -> DeclineInvitationResponse:
        token = self.deep_link_router.normalize_manual_code(request.code)
        with logfire.span("decline_invitation.execute", token=token.redacted):
            result = await self.invitation_service.decline(token)
            return DeclineInvitationResponse(
                outcome=result.outcome,
                success=result.succeeded,
                reason=result.reason,
                invitation=(
                    InvitationItem.from_invitation(result.invitation)
                    if result.invitation
                    else None
                ),
            )
