"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.service import DeepLinkRouter, InvitationService


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request.

    ``code`` is the token from a deep link or typed by hand; case and
    surrounding whitespace are ignored.
    """

    code: str


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    invitation: InvitationItem
    message: str


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for redeeming an invitation."""

    def __init__(
        self, invitation_service: InvitationService, deep_link_router: DeepLinkRouter
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation lifecycle service
            deep_link_router: Deep link router (manual code normalization)
        """
        self.invitation_service = invitation_service
        self.deep_link_router = deep_link_router

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept an invitation.

        Raises:
            ValidationError: Malformed code
            NotFoundError: Unknown token
            AlreadyAcceptedError: Already redeemed
            InvitationDeclinedError: Declined earlier
            InvitationExpiredError: Past expiry
        """
        token = self.deep_link_router.normalize_manual_code(request.code)
        with logfire.span("accept_invitation.execute", token=token.redacted):
            invitation = await self.invitation_service.accept(token)
            return AcceptInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation),
                message=f"You are now connected with {invitation.inviter_name}!",
            )
