"""Unit tests for MessageRenderer."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from twinship.domain.model import Invitation
from twinship.domain.value import InvitationId, InvitationToken
from twinship.util.templates import EMAIL_SUBJECT, MessageRenderer

TOKEN = "C0FFEE00" * 8


@pytest.fixture
def invitation():
    return Invitation(
        id=InvitationId(uuid4()),
        token=InvitationToken(TOKEN),
        inviter_name="Alex & Sam",
        recipient_email="jordan@example.com",
        created_at=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        expires_at=datetime(2025, 1, 8, 12, 0, tzinfo=timezone.utc),
        deep_link=f"twinshipvibe://invitation/{TOKEN}",
    )


class TestMessageRenderer:
    """Tests for invitation message rendering."""

    def test_email_subject(self, invitation):
        assert MessageRenderer().email_subject(invitation) == EMAIL_SUBJECT

    def test_email_body_contains_invitation_details(self, invitation):
        body = MessageRenderer().email_body(invitation)

        assert "Alex & Sam has invited you to connect on Twinship" in body
        assert f"twinshipvibe://invitation/{TOKEN}" in body
        assert TOKEN in body
        assert "expires on January 08, 2025" in body
        assert "If you're not Alex & Sam's twin" in body

    def test_plain_text_is_not_html_escaped(self, invitation):
        body = MessageRenderer().email_body(invitation)

        assert "&amp;" not in body

    def test_sms_body(self, invitation):
        body = MessageRenderer().sms_body(invitation)

        assert body.startswith("🌟 Alex & Sam invited you to Twinship!")
        assert f"Accept: twinshipvibe://invitation/{TOKEN}" in body
        assert f"use code: {TOKEN}" in body
        assert body.endswith("(expires January 08, 2025)")
