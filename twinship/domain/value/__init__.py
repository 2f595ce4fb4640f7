"""Domain value objects for Twinship."""

from twinship.domain.value.identifiers import InvitationId
from twinship.domain.value.types import (
    DeepLinkType,
    DeliveryChannel,
    EmailAddress,
    EmailComposeStatus,
    InvitationStatus,
    InvitationToken,
    InviterProfile,
    PhoneNumber,
    RecipientContact,
    SendMethod,
    SmsComposeStatus,
)

__all__ = [
    # Identifiers
    "InvitationId",
    # Types
    "DeepLinkType",
    "DeliveryChannel",
    "EmailAddress",
    "EmailComposeStatus",
    "InvitationStatus",
    "InvitationToken",
    "InviterProfile",
    "PhoneNumber",
    "RecipientContact",
    "SendMethod",
    "SmsComposeStatus",
]
