"""Unit tests for ValidateInvitationUseCase."""

import pytest

from twinship.application.usecase.invitation import (
    ValidateInvitationRequest,
    ValidateInvitationUseCase,
)
from twinship.domain.service import InvitationService
from twinship.domain.value import InvitationStatus
from twinship.util.clock import FrozenClock
from tests.conftest import make_contact, make_inviter
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestValidateInvitation:
    """Tests for previewing an invitation."""

    @pytest.mark.asyncio
    async def test_valid_invitation(self, unit_env):
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        invitation = await invitation_service.create_invitation(
            make_inviter(name="Alex", twin_type="fraternal"), make_contact()
        )

        # Act
        response = await use_case.execute(
            ValidateInvitationRequest(code=invitation.token.root.lower())
        )

        # Assert
        assert response.valid is True
        assert response.message == "Valid invitation"
        assert response.inviter_name == "Alex"
        assert response.twin_type == "fraternal"
        assert response.status == InvitationStatus.PENDING
        assert response.expires_at == invitation.expires_at

    @pytest.mark.asyncio
    async def test_malformed_code(self, unit_env):
        use_case = await unit_env.get(ValidateInvitationUseCase)

        response = await use_case.execute(ValidateInvitationRequest(code="nope"))

        assert response.valid is False
        assert response.message == "Invalid invitation token format"
        assert response.inviter_name is None

    @pytest.mark.asyncio
    async def test_unknown_code(self, unit_env):
        use_case = await unit_env.get(ValidateInvitationUseCase)

        response = await use_case.execute(ValidateInvitationRequest(code="CD" * 32))

        assert response.valid is False
        assert response.message == "Invitation not found"

    @pytest.mark.asyncio
    async def test_accepted_invitation(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.accept(invitation.token)

        response = await use_case.execute(
            ValidateInvitationRequest(code=invitation.token.root)
        )

        assert response.valid is False
        assert response.message == "Invitation has already been accepted"
        assert response.status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_declined_invitation(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        await invitation_service.decline(invitation.token)

        response = await use_case.execute(
            ValidateInvitationRequest(code=invitation.token.root)
        )

        assert response.valid is False
        assert response.message == "Invitation has been declined"

    @pytest.mark.asyncio
    async def test_overdue_invitation_is_reported_but_not_changed(self, unit_env):
        """Previewing is read-only."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        clock = await unit_env.get(FrozenClock)
        invitation = await invitation_service.create_invitation(
            make_inviter(), make_contact()
        )
        clock.advance(days=8)

        # Act
        response = await use_case.execute(
            ValidateInvitationRequest(code=invitation.token.root)
        )

        # Assert
        assert response.valid is False
        assert response.message == "Invitation has expired"
        assert response.status == InvitationStatus.EXPIRED
        stored = await invitation_service.get_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING
