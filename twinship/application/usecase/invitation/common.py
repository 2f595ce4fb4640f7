"""Invitation projections shared by use cases."""

from datetime import datetime

from pydantic import BaseModel

from twinship.domain.model.invitation import Invitation
from twinship.domain.value import InvitationStatus


class InvitationItem(BaseModel):
    """Invitation as shown to the inviter."""

    invitation_id: str
    token: str
    inviter_name: str
    recipient_email: str | None
    recipient_phone: str | None
    status: InvitationStatus
    created_at: datetime
    expires_at: datetime
    attempt_count: int
    last_attempt_at: datetime | None
    twin_type: str | None
    accent_color: str | None
    deep_link: str

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            token=invitation.token.root,
            inviter_name=invitation.inviter_name,
            recipient_email=invitation.recipient_email,
            recipient_phone=invitation.recipient_phone,
            status=invitation.status,
            created_at=invitation.created_at,
            expires_at=invitation.expires_at,
            attempt_count=invitation.attempt_count,
            last_attempt_at=invitation.last_attempt_at,
            twin_type=invitation.twin_type,
            accent_color=invitation.accent_color,
            deep_link=invitation.deep_link,
        )
