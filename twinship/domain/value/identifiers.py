"""Strongly typed identifiers for Twinship domain entities."""

from typing import NewType
from uuid import UUID

InvitationId = NewType("InvitationId", UUID)
