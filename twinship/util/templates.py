"""Invitation message templates.

Messages are plain text, so autoescaping is off; the sandbox still keeps
template code from reaching Python internals.
"""

import logging

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from twinship.domain.model.invitation import Invitation

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "🌟 Your Twin Wants to Connect on Twinship!"

EMAIL_BODY = """\
🌟 Twin Connection Invitation 🌟

Hi there!

{{ inviter_name }} has invited you to connect on Twinship - the digital space designed exclusively for twins!

Twinship helps twins strengthen their unique bond through private communication, fun games, and research-grade personality assessments. It's a special place where your twin connection can flourish.

✨ What awaits you:
• Private "Twin Talk" messaging with your twin
• "Twintuition" alerts for those psychic moments
• Fun games to test your synchronicity
• Personality assessments built specifically for twins
• A safe space to explore your twin identity

🔗 Accept this invitation:
{{ deep_link }}

Or enter this invitation code in the Twinship app:
{{ token }}

⏰ This invitation expires on {{ expires_on }}

Download Twinship from your app store and enter the code above to begin your twin journey!

With love and twin magic,
The Twinship Team 💜

---
This invitation is personal and should not be shared. If you're not {{ inviter_name }}'s twin, please disregard this message.
"""

SMS_BODY = (
    "🌟 {{ inviter_name }} invited you to Twinship! A space for twins to connect, "
    "chat & explore your unique bond. Accept: {{ deep_link }} or use code: "
    "{{ token }} (expires {{ expires_on }})"
)


class MessageRenderer:
    """Renders invitation messages for each channel."""

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._email_body = self.env.from_string(EMAIL_BODY)
        self._sms_body = self.env.from_string(SMS_BODY)

    def email_subject(self, invitation: Invitation) -> str:
        return EMAIL_SUBJECT

    def email_body(self, invitation: Invitation) -> str:
        """Render the plain-text email body for ``invitation``."""
        return self._render(self._email_body, invitation)

    def sms_body(self, invitation: Invitation) -> str:
        """Render the text message for ``invitation``."""
        return self._render(self._sms_body, invitation)

    def _render(self, template, invitation: Invitation) -> str:
        try:
            return template.render(
                inviter_name=invitation.inviter_name,
                deep_link=invitation.deep_link,
                token=invitation.token.root,
                expires_on=invitation.expires_at.strftime("%B %d, %Y"),
            )
        except TemplateError as e:
            logger.error(f"Invitation template rendering failed: {e}")
            raise
