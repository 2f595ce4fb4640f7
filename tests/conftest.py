"""Test configuration and fixtures."""

import os

from twinship.domain.value import InviterProfile, RecipientContact

# Tests never touch a file-backed database or real channels
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("EMAIL__ENABLED", "false")
os.environ.setdefault("SMS__ENABLED", "false")


def make_inviter(
    name: str = "Alex",
    twin_type: str | None = "identical",
    accent_color: str | None = "#FF6B6B",
) -> InviterProfile:
    """Helper to build the inviting twin's profile."""
    return InviterProfile(name=name, twin_type=twin_type, accent_color=accent_color)


def make_contact(
    email: str | None = "jordan@example.com",
    phone: str | None = None,
    name: str | None = "Jordan",
) -> RecipientContact:
    """Helper to build recipient contact details."""
    return RecipientContact(email=email, phone=phone, name=name)
