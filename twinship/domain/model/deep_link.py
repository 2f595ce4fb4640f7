"""Deep link intents.

A routed URL becomes one of a closed set of intents. Unrecognized or
malformed links become ``UnknownLink`` rather than an error.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from twinship.domain.model.common import DomainModel
from twinship.domain.value import DeepLinkType, InvitationToken


class _BaseLink(DomainModel):
    url: str
    timestamp: datetime


class InvitationLink(_BaseLink):
    """Link carrying an invitation token."""

    type: Literal[DeepLinkType.INVITATION] = DeepLinkType.INVITATION
    token: InvitationToken


class ProfileLink(_BaseLink):
    """Link to a twin profile."""

    type: Literal[DeepLinkType.PROFILE] = DeepLinkType.PROFILE
    user_id: str


class ChatLink(_BaseLink):
    """Link to the twin chat."""

    type: Literal[DeepLinkType.CHAT] = DeepLinkType.CHAT


class AssessmentLink(_BaseLink):
    """Link to the assessment flow."""

    type: Literal[DeepLinkType.ASSESSMENT] = DeepLinkType.ASSESSMENT


class UnknownLink(_BaseLink):
    """Anything the router could not match."""

    type: Literal[DeepLinkType.UNKNOWN] = DeepLinkType.UNKNOWN


DeepLinkIntent = Annotated[
    Union[InvitationLink, ProfileLink, ChatLink, AssessmentLink, UnknownLink],
    Field(discriminator="type"),
]


class PendingInvitation(DomainModel):
    """The single pending-token slot filled by invitation deep links."""

    token: InvitationToken
    timestamp: datetime
    processed: bool = False


class DeepLinkStatus(DomainModel):
    """Snapshot of the pending-token slot for the UI."""

    has_pending_invitation: bool
    token: Optional[str] = None
    processed: Optional[bool] = None


def invitation_link(base: str, token: InvitationToken) -> str:
    """Build the redemption URL for ``token``.

    ``base`` is either a custom scheme (``twinshipvibe``) or a web origin
    (``https://twinshipvibe.app``).
    """
    if "://" in base:
        return f"{base.rstrip('/')}/invitation/{token.root}"
    return f"{base}://invitation/{token.root}"
