"""Invitation entity.

An invitation is an offer from one twin (the inviter) to pair with another.
It is keyed by a secret token that the recipient redeems through a deep
link or by typing the code manually.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from twinship.domain.model.common import DomainModel
from twinship.domain.value import InvitationId, InvitationStatus, InvitationToken


class InvitationMetadata(DomainModel):
    """Provenance recorded for diagnostics only."""

    app_version: Optional[str] = None
    platform: Optional[str] = None


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At least one recipient contact (email or phone) is required
    - Inviter contact details are never stored, only a display name
    - expires_at is fixed at creation and never changes
    - attempt_count only grows, and only on delivery failure
    - Status moves forward only; accepted, declined and expired are terminal
    """

    id: InvitationId
    token: InvitationToken
    inviter_name: str
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime
    expires_at: datetime
    attempt_count: int = Field(default=0, ge=0)
    last_attempt_at: Optional[datetime] = None
    twin_type: Optional[str] = None  # Opaque personalization from inviter profile
    accent_color: Optional[str] = None
    deep_link: str
    metadata: InvitationMetadata = Field(default_factory=InvitationMetadata)

    @model_validator(mode="after")
    def check_contact_present(self) -> "Invitation":
        """Require at least one way to reach the recipient."""
        if not self.recipient_email and not self.recipient_phone:
            raise ValueError("Either email or phone number is required")
        return self

    def is_expired(self, now: datetime) -> bool:
        """Whether the redemption window has closed at ``now``."""
        return now > self.expires_at
