"""Pending invitation use cases."""

import logfire
from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.service import DeepLinkRouter


class PendingInvitationStatus(BaseModel):
    """State of the pending invitation slot."""

    has_pending_invitation: bool
    token: str | None = None
    processed: bool | None = None


class ProcessPendingInvitationResponse(BaseModel):
    """Result of redeeming the pending invitation."""

    invitation: InvitationItem
    status: PendingInvitationStatus


class ProcessPendingInvitationUseCase(BaseUseCase):
    """Use case for redeeming the token left by an invitation deep link."""

    def __init__(self, deep_link_router: DeepLinkRouter) -> None:
        self.deep_link_router = deep_link_router

    async def execute(self, request: None = None) -> ProcessPendingInvitationResponse:
        """Accept the pending invitation.

        Raises:
            NotFoundError: No pending token, or no invitation with that token
            AlreadyAcceptedError: Already redeemed
            InvitationDeclinedError: Declined earlier
            InvitationExpiredError: Past expiry
        """
        with logfire.span("process_pending_invitation.execute"):
            invitation = await self.deep_link_router.process_pending_invitation()
            status = await self.deep_link_router.status()
            return ProcessPendingInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation),
                status=PendingInvitationStatus(**status.model_dump()),
            )


class GetPendingInvitationUseCase(BaseUseCase):
    """Use case for reading the pending slot."""

    def __init__(self, deep_link_router: DeepLinkRouter) -> None:
        self.deep_link_router = deep_link_router

    async def execute(self, request: None = None) -> PendingInvitationStatus:
        status = await self.deep_link_router.status()
        return PendingInvitationStatus(**status.model_dump())


class ClearPendingInvitationUseCase(BaseUseCase):
    """Use case for discarding the pending slot."""

    def __init__(self, deep_link_router: DeepLinkRouter) -> None:
        self.deep_link_router = deep_link_router

    async def execute(self, request: None = None) -> PendingInvitationStatus:
        await self.deep_link_router.clear_pending()
        logfire.info("Pending invitation cleared")
        return PendingInvitationStatus(has_pending_invitation=False)
