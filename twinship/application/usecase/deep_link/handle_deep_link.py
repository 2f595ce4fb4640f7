"""Handle deep link use case."""

from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.domain.model.deep_link import InvitationLink, ProfileLink
from twinship.domain.service import DeepLinkRouter
from twinship.domain.value import DeepLinkType


class HandleDeepLinkRequest(BaseModel):
    """An inbound URL opened by the host runtime."""

    url: str


class HandleDeepLinkResponse(BaseModel):
    """Where the URL should take the user.

    Invitation links only fill the pending slot; the UI redeems the token
    later through the pending-invitation flow.
    """

    type: DeepLinkType
    token: str | None = None
    user_id: str | None = None
    has_pending_invitation: bool


class HandleDeepLinkUseCase(BaseUseCase):
    """Use case for routing inbound deep links."""

    def __init__(self, deep_link_router: DeepLinkRouter) -> None:
        self.deep_link_router = deep_link_router

    async def execute(self, request: HandleDeepLinkRequest) -> HandleDeepLinkResponse:
        intent = await self.deep_link_router.dispatch(request.url)
        status = await self.deep_link_router.status()
        return HandleDeepLinkResponse(
            type=intent.type,
            token=intent.token.root if isinstance(intent, InvitationLink) else None,
            user_id=intent.user_id if isinstance(intent, ProfileLink) else None,
            has_pending_invitation=status.has_pending_invitation,
        )
