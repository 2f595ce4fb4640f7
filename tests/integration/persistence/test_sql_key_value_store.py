"""Integration tests for the SQL-backed key-value store and repositories.

Runs against an in-memory SQLite database (STORAGE__URL in tests/conftest.py).
"""

import asyncio

import pytest

from twinship.config import Settings
from twinship.domain.error import RateLimitExceededError, StorageFailureError
from twinship.domain.model import PendingInvitation
from twinship.domain.repository import InvitationRepository, PendingLinkRepository
from twinship.domain.service import DeepLinkRouter, InvitationService
from twinship.domain.value import InvitationStatus, InvitationToken
from twinship.persistence.database import create_engine, create_session_factory
from twinship.persistence.store import KeyValueStore, SqlKeyValueStore
from twinship.util.clock import FrozenClock
from tests.conftest import make_contact, make_inviter
from tests.harness import create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})


class TestSqlKeyValueStore:
    """Tests for SqlKeyValueStore."""

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, integration_env):
        store = await integration_env.get(KeyValueStore)

        assert await store.get_item("absent") is None

    @pytest.mark.asyncio
    async def test_set_overwrite_and_remove(self, integration_env):
        # Arrange
        store = await integration_env.get(KeyValueStore)

        # Act
        await store.set_item("greeting", "hello")
        await store.set_item("greeting", "hello again")
        value = await store.get_item("greeting")
        await store.remove_item("greeting")

        # Assert
        assert value == "hello again"
        assert await store.get_item("greeting") is None

    @pytest.mark.asyncio
    async def test_remove_missing_key_is_a_no_op(self, integration_env):
        store = await integration_env.get(KeyValueStore)

        await store.remove_item("never-written")

    @pytest.mark.asyncio
    async def test_missing_schema_raises_storage_failure(self):
        """Database errors surface as StorageFailureError."""
        engine = create_engine(Settings())
        store = SqlKeyValueStore(create_session_factory(engine))

        try:
            with pytest.raises(StorageFailureError):
                await store.get_item("anything")
        finally:
            await engine.dispose()


class TestSqlBackedRepositories:
    """Repositories over the SQL store."""

    @pytest.mark.asyncio
    async def test_invitation_survives_round_trip(self, integration_env):
        # Arrange
        invitation_service = await integration_env.get(InvitationService)
        invitation_repo = await integration_env.get(InvitationRepository)

        # Act
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact(phone="+15551234567")
        )
        found = await invitation_repo.find_by_token(invitation.token)

        # Assert
        assert found == invitation

    @pytest.mark.asyncio
    async def test_lifecycle_is_persisted(self, integration_env):
        invitation_service = await integration_env.get(InvitationService)
        invitation_repo = await integration_env.get(InvitationRepository)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )

        await invitation_service.mark_sent(invitation.id)
        await invitation_service.accept(invitation.token)

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert stored.last_attempt_at is not None

    @pytest.mark.asyncio
    async def test_prune_on_initialize(self, integration_env):
        invitation_service = await integration_env.get(InvitationService)
        clock = await integration_env.get(FrozenClock)
        await invitation_service.create_invitation(make_inviter(), make_contact())
        clock.advance(days=45)

        removed = await invitation_service.initialize()

        assert removed == 1
        assert await invitation_service.list_all() == []

    @pytest.mark.asyncio
    async def test_pending_slot_round_trip(self, integration_env):
        pending_repo = await integration_env.get(PendingLinkRepository)
        clock = await integration_env.get(FrozenClock)
        pending = PendingInvitation(
            token=InvitationToken("9F" * 32), timestamp=clock.now(), processed=False
        )

        await pending_repo.save(pending)

        assert await pending_repo.get() == pending

    @pytest.mark.asyncio
    async def test_deep_link_flow_over_sql(self, integration_env):
        invitation_service = await integration_env.get(InvitationService)
        router = await integration_env.get(DeepLinkRouter)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )

        await router.route(invitation.deep_link)
        accepted = await router.process_pending_invitation()

        assert accepted.status == InvitationStatus.ACCEPTED
        status = await router.status()
        assert status.processed is True


class TestConcurrentCreation:
    """Rate limiting under concurrent creation against SQL storage."""

    @pytest.mark.asyncio
    async def test_concurrent_creations_respect_window_limit(self, integration_env):
        """Ten simultaneous creations yield exactly five invitations."""
        # Arrange
        invitation_service = await integration_env.get(InvitationService)
        contacts = [make_contact(email=f"twin{i}@example.com") for i in range(10)]

        # Act
        results = await asyncio.gather(
            *(
                invitation_service.create_invitation(make_inviter(), contact)
                for contact in contacts
            ),
            return_exceptions=True,
        )

        # Assert
        created = [r for r in results if not isinstance(r, BaseException)]
        rejected = [r for r in results if isinstance(r, RateLimitExceededError)]
        assert len(created) == 5
        assert len(rejected) == 5
        assert len(await invitation_service.list_all()) == 5
