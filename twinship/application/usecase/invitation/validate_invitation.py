"""Validate invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from twinship.domain.error import ValidationError
from twinship.domain.service import DeepLinkRouter, InvitationService
from twinship.domain.value import InvitationStatus
from twinship.util.clock import Clock


class ValidateInvitationRequest(BaseModel):
    """Validate invitation request."""

    code: str


class ValidateInvitationResponse(BaseModel):
    """Preview of an invitation for the recipient."""

    valid: bool
    status: InvitationStatus | None = None
    inviter_name: str | None = None
    twin_type: str | None = None
    accent_color: str | None = None
    expires_at: datetime | None = None
    message: str | None = None


class ValidateInvitationUseCase:
    """Use case for previewing an invitation token.

    Lets the recipient see who invited them before deciding to accept.
    Read-only: an overdue invitation is reported as expired but not
    changed.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        deep_link_router: DeepLinkRouter,
        clock: Clock,
    ) -> None:
        """Initialize validate invitation use case.

        Args:
            invitation_service: Invitation lifecycle service
            deep_link_router: Deep link router (manual code normalization)
            clock: Time source
        """
        self.invitation_service = invitation_service
        self.deep_link_router = deep_link_router
        self.clock = clock

    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        """Validate an invitation token.

        Args:
            request: Validation request with code

        Returns:
            Validation response with invitation details or the reason it
            cannot be accepted
        """
        try:
            token = self.deep_link_router.normalize_manual_code(request.code)
        except ValidationError:
            return ValidateInvitationResponse(
                valid=False, message="Invalid invitation token format"
            )

        with logfire.span("validate_invitation.execute", token=token.redacted):
            invitation = await self.invitation_service.get_by_token(token)

            if not invitation:
                return ValidateInvitationResponse(
                    valid=False, message="Invitation not found"
                )

            preview = {
                "status": invitation.status,
                "inviter_name": invitation.inviter_name,
                "twin_type": invitation.twin_type,
                "accent_color": invitation.accent_color,
                "expires_at": invitation.expires_at,
            }

            if invitation.status == InvitationStatus.ACCEPTED:
                return ValidateInvitationResponse(
                    valid=False, message="Invitation has already been accepted", **preview
                )

            if invitation.status == InvitationStatus.DECLINED:
                return ValidateInvitationResponse(
                    valid=False, message="Invitation has been declined", **preview
                )

            if invitation.status == InvitationStatus.EXPIRED or invitation.is_expired(
                self.clock.now()
            ):
                preview["status"] = InvitationStatus.EXPIRED
                return ValidateInvitationResponse(
                    valid=False, message="Invitation has expired", **preview
                )

            logfire.info(
                "Valid invitation found",
                token=token.redacted,
                status=invitation.status.value,
            )
            return ValidateInvitationResponse(
                valid=True, message="Valid invitation", **preview
            )
