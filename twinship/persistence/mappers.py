"""Mappers between domain models and stored JSON documents.

Invitations are stored as one JSON array of camelCase records, the same
shape the mobile client persists.
"""

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from twinship.domain.error import StorageFailureError
from twinship.domain.model.deep_link import PendingInvitation
from twinship.domain.model.invitation import Invitation

_invitation_list = TypeAdapter(list[Invitation])


def invitations_to_json(invitations: list[Invitation]) -> str:
    """Serialize invitations to the stored array document."""
    return _invitation_list.dump_json(invitations, by_alias=True).decode()


def json_to_invitations(document: str | None) -> list[Invitation]:
    """Deserialize the stored array document.

    Raises:
        StorageFailureError: If the document is corrupt
    """
    if not document:
        return []
    try:
        return _invitation_list.validate_json(document)
    except PydanticValidationError as e:
        raise StorageFailureError("decode", str(e)) from e


def pending_to_json(pending: PendingInvitation) -> str:
    """Serialize the pending-token slot."""
    return pending.model_dump_json(by_alias=True)


def json_to_pending(document: str | None) -> PendingInvitation | None:
    """Deserialize the pending-token slot.

    Raises:
        StorageFailureError: If the document is corrupt
    """
    if not document:
        return None
    try:
        return PendingInvitation.model_validate_json(document)
    except PydanticValidationError as e:
        raise StorageFailureError("decode", str(e)) from e
