"""Secure invitation token generation."""

import secrets

from twinship.domain.value import InvitationToken
from twinship.domain.value.types import TOKEN_BYTES

from .base import Service


class TokenGenerator(Service):
    """Generates invitation tokens from the OS CSPRNG.

    There is no fallback source: if the OS cannot supply randomness the
    error propagates and no invitation is created.
    """

    def generate(self) -> InvitationToken:
        """Return a fresh 64-character uppercase hex token."""
        return InvitationToken(secrets.token_bytes(TOKEN_BYTES).hex().upper())
