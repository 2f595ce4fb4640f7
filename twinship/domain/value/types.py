"""Domain value objects for Twinship invitations.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from twinship.domain.value.common import RootValueObject, ValueObject

# Tokens are 32 random bytes rendered as uppercase hex
TOKEN_BYTES = 32
TOKEN_LENGTH = TOKEN_BYTES * 2
TOKEN_PATTERN = re.compile(rf"^[0-9A-F]{{{TOKEN_LENGTH}}}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[1-9]\d{1,14}$")


class InvitationStatus(str, Enum):
    """Status of an invitation.

    Lifecycle: pending -> sent -> delivered -> accepted. Declined and expired
    are terminal and reachable from any non-terminal state.
    """

    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in _TERMINAL

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        """Check whether moving to ``target`` keeps the lifecycle monotonic.

        Re-stamping a non-terminal status with itself is allowed (a resend or
        a saved draft), moving backwards along pending -> sent -> delivered is
        not, and terminal states never change.
        """
        if self.is_terminal:
            return False
        if target.is_terminal:
            return True
        return _PROGRESS.index(target) >= _PROGRESS.index(self)


_TERMINAL = frozenset(
    {InvitationStatus.ACCEPTED, InvitationStatus.DECLINED, InvitationStatus.EXPIRED}
)
_PROGRESS = [InvitationStatus.PENDING, InvitationStatus.SENT, InvitationStatus.DELIVERED]


class DeliveryChannel(str, Enum):
    """Channel an invitation is transmitted over."""

    EMAIL = "email"
    SMS = "sms"


class SendMethod(str, Enum):
    """Channels requested by the inviter for a new invitation."""

    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"

    @property
    def channels(self) -> list[DeliveryChannel]:
        """Channels covered by this method, email first."""
        if self == SendMethod.BOTH:
            return [DeliveryChannel.EMAIL, DeliveryChannel.SMS]
        return [DeliveryChannel(self.value)]


class EmailComposeStatus(str, Enum):
    """Outcome reported by the email transport."""

    SENT = "sent"
    SAVED = "saved"
    CANCELLED = "cancelled"


class SmsComposeStatus(str, Enum):
    """Outcome reported by the text message transport."""

    SENT = "sent"
    FAILED = "failed"


class DeepLinkType(str, Enum):
    """Kind of in-app destination a deep link resolves to."""

    INVITATION = "invitation"
    PROFILE = "profile"
    CHAT = "chat"
    ASSESSMENT = "assessment"
    UNKNOWN = "unknown"


class InvitationToken(RootValueObject[str]):
    """Secret 64-character uppercase hexadecimal invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is exactly 64 uppercase hex characters."""
        if not TOKEN_PATTERN.match(v):
            raise ValueError("Token must be 64 uppercase hexadecimal characters")
        return v

    @classmethod
    def from_user_input(cls, value: str) -> "InvitationToken":
        """Build a token from a manually entered code.

        Codes are accepted case-insensitively and surrounding whitespace is
        ignored.

        Raises:
            pydantic.ValidationError: If the normalized code is malformed
        """
        return cls(value.strip().upper())

    @property
    def redacted(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class EmailAddress(RootValueObject[str]):
    """Recipient email address."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate basic email shape."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address format")
        return v


class PhoneNumber(RootValueObject[str]):
    """Recipient phone number in loose E.164 form."""

    @field_validator("root")
    @classmethod
    def validate_phone_format(cls, v: str) -> str:
        """Validate phone number after stripping spaces, parentheses and dashes."""
        v = v.strip()
        if not PHONE_PATTERN.match(re.sub(r"[\s()-]", "", v)):
            raise ValueError("Invalid phone number format")
        return v


class InviterProfile(ValueObject):
    """Inviter details copied into a new invitation.

    Only the display name is kept; twin_type and accent_color are opaque
    personalization shown on the recipient's acceptance view.
    """

    name: str
    twin_type: str | None = None
    accent_color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Require a non-blank display name."""
        v = v.strip()
        if not v:
            raise ValueError("Inviter name is required")
        return v


class RecipientContact(ValueObject):
    """How to reach the invited twin. Validated by the invitation service."""

    email: str | None = None
    phone: str | None = None
    name: str | None = None
