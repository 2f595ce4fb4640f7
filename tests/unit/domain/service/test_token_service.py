"""Unit tests for TokenGenerator."""

import pytest

from twinship.domain.service import TokenGenerator
from twinship.domain.value import InvitationToken
from twinship.domain.value.types import TOKEN_BYTES, TOKEN_LENGTH
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGenerate:
    """Tests for generate method."""

    @pytest.mark.asyncio
    async def test_generates_64_uppercase_hex_characters(self, unit_env):
        """Tokens should be 64 uppercase hexadecimal characters."""
        # Arrange
        token_generator = await unit_env.get(TokenGenerator)

        # Act
        token = token_generator.generate()

        # Assert
        assert len(token.root) == 64
        assert token.root == token.root.upper()
        int(token.root, 16)

    def test_tokens_are_unique(self):
        """Repeated generation should never collide."""
        token_generator = TokenGenerator()

        tokens = {token_generator.generate().root for _ in range(200)}

        assert len(tokens) == 200

    def test_redacted_form_hides_the_secret(self):
        """Only the first 8 characters should be safe to log."""
        token = TokenGenerator().generate()

        assert token.redacted == token.root[:8] + "..."

    def test_generated_length_matches_token_validation(self):
        """Generated tokens always satisfy the token value object."""
        token = TokenGenerator().generate()

        assert TOKEN_LENGTH == TOKEN_BYTES * 2 == 64
        assert InvitationToken(token.root) == token
        assert len(token.root) == TOKEN_LENGTH
