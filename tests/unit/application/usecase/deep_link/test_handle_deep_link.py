"""Unit tests for HandleDeepLinkUseCase."""

import pytest

from twinship.application.usecase.deep_link import (
    HandleDeepLinkRequest,
    HandleDeepLinkUseCase,
)
from twinship.domain.value import DeepLinkType
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

TOKEN = "0123456789ABCDEF" * 4


class TestHandleDeepLink:
    """Tests for routing inbound URLs."""

    @pytest.mark.asyncio
    async def test_invitation_link_becomes_pending(self, unit_env):
        use_case = await unit_env.get(HandleDeepLinkUseCase)

        response = await use_case.execute(
            HandleDeepLinkRequest(url=f"twinshipvibe://invitation/{TOKEN}")
        )

        assert response.type == DeepLinkType.INVITATION
        assert response.token == TOKEN
        assert response.has_pending_invitation is True

    @pytest.mark.asyncio
    async def test_profile_link(self, unit_env):
        use_case = await unit_env.get(HandleDeepLinkUseCase)

        response = await use_case.execute(
            HandleDeepLinkRequest(url="https://twinshipvibe.app/profile/u-7")
        )

        assert response.type == DeepLinkType.PROFILE
        assert response.user_id == "u-7"
        assert response.token is None
        assert response.has_pending_invitation is False

    @pytest.mark.asyncio
    async def test_garbage_is_unknown_not_an_error(self, unit_env):
        use_case = await unit_env.get(HandleDeepLinkUseCase)

        response = await use_case.execute(HandleDeepLinkRequest(url="::::"))

        assert response.type == DeepLinkType.UNKNOWN
