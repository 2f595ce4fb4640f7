"""Environment fixtures for unit and integration tests."""

import pytest_asyncio

from twinship.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Create a fixture yielding a request-scoped container.

    Each test gets a fresh container, so APP-scoped services (rate limiter,
    record locks, in-memory repositories) never leak between tests. The
    container is closed afterwards, disposing any engine it opened.

    Args:
        unmock: Components to use real implementations for

    Usage:
        unit_env = create_env_fixture()
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_accept(unit_env):
            invitation_service = await unit_env.get(InvitationService)
            ...
    """

    @pytest_asyncio.fixture
    async def _env():
        container = build_test_container(unmock=unmock)
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _env
