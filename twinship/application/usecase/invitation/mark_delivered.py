"""Mark invitation delivered use case."""

from pydantic import BaseModel

from twinship.application.usecase.base import BaseUseCase
from twinship.application.usecase.invitation.common import InvitationItem
from twinship.domain.service import InvitationService


class MarkDeliveredRequest(BaseModel):
    """Delivery receipt for an invitation."""

    token: str


class MarkDeliveredUseCase(BaseUseCase):
    """Use case for recording a channel delivery receipt."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: MarkDeliveredRequest) -> InvitationItem:
        invitation = await self.invitation_service.mark_delivered(request.token)
        return InvitationItem.from_invitation(invitation)
