"""Deep link routing domain service."""

import re
from typing import Awaitable, Callable
from urllib.parse import urlsplit

import logfire
from pydantic import ValidationError as PydanticValidationError

from twinship.config import DeepLinkSettings
from twinship.domain.error import NotFoundError, ValidationError
from twinship.domain.model.deep_link import (
    AssessmentLink,
    ChatLink,
    DeepLinkIntent,
    DeepLinkStatus,
    InvitationLink,
    PendingInvitation,
    ProfileLink,
    UnknownLink,
    invitation_link,
)
from twinship.domain.model.invitation import Invitation
from twinship.domain.repository import PendingLinkRepository
from twinship.domain.value import DeepLinkType, InvitationToken
from twinship.domain.value.types import TOKEN_LENGTH
from twinship.util.clock import Clock

from .base import Service
from .invitation_service import InvitationService

DeepLinkHandler = Callable[[DeepLinkIntent], Awaitable[None]]

# Ordered: first match wins
INVITATION_PATH = re.compile(rf"^/invitation/([0-9A-Fa-f]{{{TOKEN_LENGTH}}})/?$")
PROFILE_PATH = re.compile(r"^/profile/(.+?)/?$")
CHAT_PATH = re.compile(r"^/chat/?$")
ASSESSMENT_PATH = re.compile(r"^/assessment/?$")

WEB_SCHEMES = frozenset({"http", "https"})


class DeepLinkRouter(Service):
    """Turns inbound URLs into typed intents.

    Invitation links are never redeemed here: the token only fills the
    pending slot, and redemption happens later through
    ``process_pending_invitation``. Anything that does not match a known
    pattern, including invitation paths with a malformed token, becomes an
    ``UnknownLink``.
    """

    def __init__(
        self,
        pending_link_repository: PendingLinkRepository,
        invitation_service: InvitationService,
        clock: Clock,
        deep_link_settings: DeepLinkSettings,
    ) -> None:
        """Initialize deep link router.

        Args:
            pending_link_repository: Single pending-token slot
            invitation_service: Lifecycle service used for redemption
            clock: Time source
            deep_link_settings: App scheme and web origin
        """
        self.pending_link_repository = pending_link_repository
        self.invitation_service = invitation_service
        self.clock = clock
        self.settings = deep_link_settings
        self._handlers: dict[DeepLinkType, DeepLinkHandler] = {}

    def parse(self, url: str) -> DeepLinkIntent:
        """Classify a URL without side effects."""
        timestamp = self.clock.now()
        path = self._route_path(url)
        if path is None:
            return UnknownLink(url=url, timestamp=timestamp)

        match = INVITATION_PATH.match(path)
        if match:
            token = InvitationToken(match.group(1).upper())
            return InvitationLink(url=url, timestamp=timestamp, token=token)

        match = PROFILE_PATH.match(path)
        if match:
            return ProfileLink(url=url, timestamp=timestamp, user_id=match.group(1))

        if CHAT_PATH.match(path):
            return ChatLink(url=url, timestamp=timestamp)

        if ASSESSMENT_PATH.match(path):
            return AssessmentLink(url=url, timestamp=timestamp)

        return UnknownLink(url=url, timestamp=timestamp)

    async def route(self, url: str) -> DeepLinkIntent:
        """Classify a URL and fill the pending slot for invitation links.

        A new invitation link overwrites any previously pending token.
        """
        intent = self.parse(url)
        with logfire.span("deep_link_router.route", type=intent.type.value):
            if isinstance(intent, InvitationLink):
                await self.pending_link_repository.save(
                    PendingInvitation(
                        token=intent.token, timestamp=intent.timestamp, processed=False
                    )
                )
                logfire.info(
                    "Invitation deep link stored", token=intent.token.redacted
                )
            elif isinstance(intent, UnknownLink):
                logfire.warn("Unrecognized deep link")
            return intent

    def register_handler(self, link_type: DeepLinkType, handler: DeepLinkHandler) -> None:
        """Register the handler for a link type, replacing any existing one."""
        self._handlers[link_type] = handler

    async def dispatch(self, url: str) -> DeepLinkIntent:
        """Route a URL, then run the handler registered for its type.

        Handler errors are logged and never reach the caller.
        """
        intent = await self.route(url)
        handler = self._handlers.get(intent.type)
        if handler is None:
            return intent

        try:
            await handler(intent)
        except Exception as e:
            logfire.error(
                "Deep link handler failed", type=intent.type.value, error=str(e)
            )
        return intent

    async def process_pending_invitation(self) -> Invitation:
        """Redeem the pending token through the lifecycle service.

        On success the slot is marked processed and no longer pending. On
        failure the token stays pending and the lifecycle error propagates.

        Raises:
            NotFoundError: If no token is pending
        """
        pending = await self.pending_link_repository.get()
        if pending is None or pending.processed:
            raise NotFoundError("Pending invitation", "none")

        with logfire.span(
            "deep_link_router.process_pending_invitation",
            token=pending.token.redacted,
        ):
            invitation = await self.invitation_service.accept(pending.token)
            await self.pending_link_repository.save(
                pending.model_copy(update={"processed": True})
            )
            logfire.info("Pending invitation processed", token=pending.token.redacted)
            return invitation

    async def clear_pending(self) -> None:
        """Drop the pending token and its processed marker."""
        await self.pending_link_repository.clear()

    async def status(self) -> DeepLinkStatus:
        """Snapshot of the pending slot."""
        pending = await self.pending_link_repository.get()
        if pending is None:
            return DeepLinkStatus(has_pending_invitation=False)
        if pending.processed:
            return DeepLinkStatus(has_pending_invitation=False, processed=True)
        return DeepLinkStatus(
            has_pending_invitation=True, token=pending.token.root, processed=False
        )

    def create_invitation_link(self, token: InvitationToken) -> str:
        """App link, e.g. ``twinshipvibe://invitation/<TOKEN>``."""
        return invitation_link(self.settings.scheme, token)

    def create_web_invitation_link(self, token: InvitationToken) -> str:
        """Web fallback link for sharing outside the app."""
        return invitation_link(self.settings.web_url, token)

    def is_valid_invitation_link(self, url: str) -> bool:
        return isinstance(self.parse(url), InvitationLink)

    def extract_invitation_token(self, url: str) -> InvitationToken | None:
        intent = self.parse(url)
        if isinstance(intent, InvitationLink):
            return intent.token
        return None

    def normalize_manual_code(self, text: str) -> InvitationToken:
        """Turn a typed invitation code into a token.

        Raises:
            ValidationError: If the code is not 64 hexadecimal characters
        """
        try:
            return InvitationToken.from_user_input(text)
        except PydanticValidationError:
            raise ValidationError("Invalid invitation code format")

    @staticmethod
    def _route_path(url: str) -> str | None:
        """Path the patterns are matched against.

        Web links route on their path. App links such as
        ``twinshipvibe://invitation/<TOKEN>`` put the first segment in the
        host position, so it is folded back into the path. Hosts are
        case-insensitive and are lower-cased first.
        """
        try:
            parts = urlsplit(url.strip())
        except ValueError:
            return None
        if not parts.scheme:
            return None
        if parts.scheme.lower() in WEB_SCHEMES:
            return parts.path or "/"
        return f"/{parts.netloc.lower()}{parts.path}" if parts.netloc else parts.path
