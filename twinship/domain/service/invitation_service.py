"""Invitation lifecycle domain service."""

from datetime import timedelta
from typing import Any
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from twinship.config import DeepLinkSettings, InvitationSettings
from twinship.domain.error import (
    AlreadyAcceptedError,
    InvalidTransitionError,
    InvitationDeclinedError,
    InvitationExpiredError,
    NotFoundError,
    ValidationError,
)
from twinship.domain.model.deep_link import invitation_link
from twinship.domain.model.invitation import Invitation, InvitationMetadata
from twinship.domain.model.outcome import DispatchOutcome, DispatchResult
from twinship.domain.repository import InvitationRepository
from twinship.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    InviterProfile,
    PhoneNumber,
    RecipientContact,
)
from twinship.util.clock import Clock
from twinship.util.locks import KeyedLock

from .base import Service
from .rate_limiter import RateLimiter
from .token_service import TokenGenerator
from .transport import Notifier


def parse_token(token: str | InvitationToken) -> InvitationToken:
    """Validate a raw token string before it reaches storage.

    Raises:
        ValidationError: If the token is not 64 uppercase hex characters
    """
    if isinstance(token, InvitationToken):
        return token
    try:
        return InvitationToken(token)
    except PydanticValidationError:
        raise ValidationError("Invalid invitation token format")


class InvitationService(Service):
    """Lifecycle state machine for invitations.

    States: pending -> sent -> delivered -> accepted, with declined and
    expired reachable from any non-terminal state. Terminal states never
    change. Every status mutation of a record runs under that record's lock.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        token_generator: TokenGenerator,
        rate_limiter: RateLimiter,
        notifier: Notifier,
        clock: Clock,
        invitation_settings: InvitationSettings,
        deep_link_settings: DeepLinkSettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            token_generator: Secure token source
            rate_limiter: Creation rate limiter
            notifier: Local notification sink
            clock: Time source
            invitation_settings: Lifecycle constants
            deep_link_settings: Scheme used for redemption links
        """
        self.invitation_repository = invitation_repository
        self.token_generator = token_generator
        self.rate_limiter = rate_limiter
        self.notifier = notifier
        self.clock = clock
        self.settings = invitation_settings
        self.deep_link_settings = deep_link_settings
        self._record_locks = KeyedLock()

    async def initialize(self) -> int:
        """Prune stale records once at engine start.

        Overdue pending invitations are expired through the normal status
        path first, so each is stamped and announced like any other expiry.

        Returns:
            Number of records removed
        """
        with logfire.span("invitation_service.initialize"):
            now = self.clock.now()
            for invitation in await self.invitation_repository.list_all():
                if invitation.status == InvitationStatus.PENDING and invitation.is_expired(
                    now
                ):
                    await self.mark_expired(invitation.id)

            removed = await self.invitation_repository.prune(
                now, timedelta(days=self.settings.retention_days)
            )
            logfire.info("Invitation storage pruned", removed=removed)
            return removed

    async def create_invitation(
        self, inviter: InviterProfile, contact: RecipientContact
    ) -> Invitation:
        """Create a new pending invitation.

        Args:
            inviter: Inviter profile (only the display name is stored)
            contact: Recipient email and/or phone

        Returns:
            Created invitation

        Raises:
            RateLimitExceededError: If too many invitations were created recently
            ValidationError: If contact details are missing or malformed
        """
        with logfire.span(
            "invitation_service.create_invitation",
            has_email=bool(contact.email),
            has_phone=bool(contact.phone),
        ):
            async with self.rate_limiter.reserve():
                email, phone = self._validate_contact(contact)

                token = self.token_generator.generate()
                now = self.clock.now()
                invitation = Invitation(
                    id=InvitationId(uuid4()),
                    token=token,
                    inviter_name=inviter.name,
                    recipient_email=email,
                    recipient_phone=phone,
                    status=InvitationStatus.PENDING,
                    created_at=now,
                    expires_at=now + timedelta(hours=self.settings.expiry_hours),
                    attempt_count=0,
                    twin_type=inviter.twin_type,
                    accent_color=inviter.accent_color,
                    deep_link=invitation_link(self.deep_link_settings.scheme, token),
                    metadata=InvitationMetadata(
                        app_version=self.settings.app_version,
                        platform=self.settings.platform,
                    ),
                )

                saved = await self.invitation_repository.create(invitation)

            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                token=token.redacted,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_by_token(self, token: str | InvitationToken) -> Invitation | None:
        """Get invitation by token.

        Raises:
            ValidationError: If the token is malformed (no storage read happens)
        """
        parsed = parse_token(token)
        with logfire.span(
            "invitation_service.get_by_token", token=parsed.redacted
        ):
            invitation = await self.invitation_repository.find_by_token(parsed)
            if not invitation:
                logfire.warn("Invitation not found", token=parsed.redacted)
            return invitation

    async def get_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Get invitation by ID."""
        return await self.invitation_repository.find_by_id(invitation_id)

    async def accept(self, token: str | InvitationToken) -> Invitation:
        """Redeem an invitation.

        Accepting twice is an error on the second call, never a silent
        success. An overdue invitation is durably marked expired before the
        error is raised.

        Returns:
            The accepted invitation

        Raises:
            ValidationError: Malformed token
            NotFoundError: No invitation with this token
            AlreadyAcceptedError: Already redeemed
            InvitationDeclinedError: Declined by the recipient
            InvitationExpiredError: Past its redemption window
        """
        parsed = parse_token(token)
        with logfire.span("invitation_service.accept", token=parsed.redacted):
            invitation = await self._require_by_token(parsed)

            async with self._record_locks.hold(invitation.id):
                invitation = await self._require_by_token(parsed)
                invitation_id = str(invitation.id)

                if invitation.status == InvitationStatus.ACCEPTED:
                    logfire.info("Invitation already accepted", invitation_id=invitation_id)
                    raise AlreadyAcceptedError(invitation_id)

                if invitation.status == InvitationStatus.DECLINED:
                    logfire.info("Invitation was declined", invitation_id=invitation_id)
                    raise InvitationDeclinedError(invitation_id)

                now = self.clock.now()
                if invitation.status == InvitationStatus.EXPIRED or invitation.is_expired(
                    now
                ):
                    if invitation.status != InvitationStatus.EXPIRED:
                        await self._set_status(invitation, InvitationStatus.EXPIRED)
                    logfire.info("Invitation expired", invitation_id=invitation_id)
                    raise InvitationExpiredError(invitation_id)

                accepted = await self._set_status(invitation, InvitationStatus.ACCEPTED)

            logfire.info("Invitation accepted", invitation_id=invitation_id)
            await self._notify(
                "Invitation accepted",
                "Your twin accepted your invitation!",
                accepted,
            )
            return accepted

    async def decline(self, token: str | InvitationToken) -> DispatchResult:
        """Decline an invitation.

        Idempotent from the caller's side: an unknown token or an invitation
        that is already terminal yields ``ALREADY_HANDLED`` with the reason.

        Raises:
            ValidationError: Malformed token
        """
        parsed = parse_token(token)
        with logfire.span("invitation_service.decline", token=parsed.redacted):
            invitation = await self.invitation_repository.find_by_token(parsed)
            if not invitation:
                logfire.warn("Decline for unknown invitation", token=parsed.redacted)
                return DispatchResult(
                    outcome=DispatchOutcome.ALREADY_HANDLED, reason="not_found"
                )

            async with self._record_locks.hold(invitation.id):
                invitation = await self.invitation_repository.find_by_token(parsed)
                if invitation is None:
                    return DispatchResult(
                        outcome=DispatchOutcome.ALREADY_HANDLED, reason="not_found"
                    )

                if invitation.status.is_terminal:
                    return DispatchResult(
                        outcome=DispatchOutcome.ALREADY_HANDLED,
                        invitation=invitation,
                        reason=invitation.status.value,
                    )

                if invitation.is_expired(self.clock.now()):
                    expired = await self._set_status(invitation, InvitationStatus.EXPIRED)
                    return DispatchResult(
                        outcome=DispatchOutcome.ALREADY_HANDLED,
                        invitation=expired,
                        reason=InvitationStatus.EXPIRED.value,
                    )

                declined = await self._set_status(invitation, InvitationStatus.DECLINED)

            logfire.info("Invitation declined", invitation_id=str(declined.id))
            await self._notify(
                "Invitation declined", "Your invitation was declined.", declined
            )
            return DispatchResult(outcome=DispatchOutcome.DECLINED, invitation=declined)

    async def mark_sent(self, invitation_id: InvitationId) -> Invitation | None:
        """Record a successful channel hand-off.

        A delivered invitation stays delivered; only last_attempt_at moves.

        Raises:
            InvalidTransitionError: If the invitation is already terminal
        """
        async with self._record_locks.hold(invitation_id):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None:
                return None

            target = InvitationStatus.SENT
            if invitation.status == InvitationStatus.DELIVERED:
                target = InvitationStatus.DELIVERED
            updated = await self._set_status(invitation, target)

        logfire.info("Invitation sent", invitation_id=str(invitation_id))
        await self._notify("Invitation sent", "Your invitation is on its way.", updated)
        return updated

    async def mark_draft_saved(self, invitation_id: InvitationId) -> Invitation | None:
        """Record that the inviter saved the email as a draft.

        The invitation stays pending; only last_attempt_at moves. Invitations
        already past pending are left untouched.
        """
        async with self._record_locks.hold(invitation_id):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None or invitation.status != InvitationStatus.PENDING:
                return invitation
            return await self._set_status(invitation, InvitationStatus.PENDING)

    async def mark_delivered(self, token: str | InvitationToken) -> Invitation:
        """Record a delivery receipt for an invitation.

        Raises:
            ValidationError: Malformed token
            NotFoundError: No invitation with this token
            InvalidTransitionError: If the invitation is already terminal
        """
        parsed = parse_token(token)
        with logfire.span("invitation_service.mark_delivered", token=parsed.redacted):
            invitation = await self._require_by_token(parsed)
            async with self._record_locks.hold(invitation.id):
                invitation = await self._require_by_token(parsed)
                return await self._set_status(invitation, InvitationStatus.DELIVERED)

    async def mark_expired(self, invitation_id: InvitationId) -> Invitation | None:
        """Durably record that an invitation's redemption window has passed.

        Terminal invitations are returned unchanged.
        """
        async with self._record_locks.hold(invitation_id):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None or invitation.status.is_terminal:
                return invitation
            logfire.info("Invitation expired", invitation_id=str(invitation_id))
            return await self._set_status(invitation, InvitationStatus.EXPIRED)

    async def record_failed_attempt(
        self, invitation_id: InvitationId
    ) -> Invitation | None:
        """Count a failed delivery attempt."""
        async with self._record_locks.hold(invitation_id):
            updated = await self.invitation_repository.increment_attempt(
                invitation_id, self.clock.now()
            )
        if updated:
            logfire.warn(
                "Invitation delivery attempt failed",
                invitation_id=str(invitation_id),
                attempt_count=updated.attempt_count,
            )
        return updated

    async def list_all(self) -> list[Invitation]:
        """Return every stored invitation."""
        return await self.invitation_repository.list_all()

    async def clear_all(self) -> None:
        """Remove all invitation data."""
        with logfire.span("invitation_service.clear_all"):
            await self.invitation_repository.clear()
            logfire.warn("All invitation data cleared")

    async def _require_by_token(self, token: InvitationToken) -> Invitation:
        invitation = await self.invitation_repository.find_by_token(token)
        if invitation is None:
            logfire.warn("Invitation not found", token=token.redacted)
            raise NotFoundError("Invitation", token.redacted)
        return invitation

    async def _set_status(
        self, invitation: Invitation, target: InvitationStatus
    ) -> Invitation:
        if not invitation.status.can_transition_to(target):
            logfire.warn(
                "Rejected invitation status change",
                invitation_id=str(invitation.id),
                current=invitation.status.value,
                target=target.value,
            )
            raise InvalidTransitionError(
                str(invitation.id), invitation.status.value, target.value
            )

        updated = await self.invitation_repository.update_status(
            invitation.id, target, self.clock.now()
        )
        if updated is None:
            raise NotFoundError("Invitation", str(invitation.id))

        if target == InvitationStatus.EXPIRED:
            await self._notify(
                "Invitation expired", "An invitation has expired.", updated
            )
        return updated

    def _validate_contact(self, contact: RecipientContact) -> tuple[str | None, str | None]:
        if not contact.email and not contact.phone:
            raise ValidationError("Either email or phone number is required")

        email = phone = None
        try:
            if contact.email:
                email = EmailAddress(contact.email).root
        except PydanticValidationError:
            raise ValidationError("Invalid email address format")
        try:
            if contact.phone:
                phone = PhoneNumber(contact.phone).root
        except PydanticValidationError:
            raise ValidationError("Invalid phone number format")
        return email, phone

    async def _notify(self, title: str, body: str, invitation: Invitation) -> None:
        data: dict[str, Any] = {
            "invitation_id": str(invitation.id),
            "status": invitation.status.value,
        }
        try:
            await self.notifier.notify(title, body, data)
        except Exception as e:
            # Notifications are best effort and must never break the lifecycle
            logfire.warn("Notification failed", title=title, error=str(e))
