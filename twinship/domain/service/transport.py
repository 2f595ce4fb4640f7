"""Channel transport and notification interfaces.

The engine never speaks mail or carrier protocols itself. It composes a
message and hands it to a transport, then reacts to the reported outcome.
"""

from typing import Any

from twinship.domain.value import EmailComposeStatus, SmsComposeStatus


class ChannelTransport:
    """Generic transport interface for invitation channels."""

    async def is_email_available(self) -> bool:
        """Whether email can be composed on this host."""
        raise NotImplementedError

    async def compose_email(
        self, recipient: str, subject: str, body: str
    ) -> EmailComposeStatus:
        """Compose an email and hand it off.

        Args:
            recipient: Recipient email address
            subject: Subject line
            body: Plain-text body

        Returns:
            Whether the message was sent, saved as a draft, or cancelled

        Raises:
            TransportFailureError: If the hand-off fails
        """
        raise NotImplementedError

    async def is_sms_available(self) -> bool:
        """Whether text messages can be composed on this host."""
        raise NotImplementedError

    async def compose_sms(self, recipient: str, body: str) -> SmsComposeStatus:
        """Compose a text message and hand it off.

        Args:
            recipient: Recipient phone number
            body: Message text

        Returns:
            Whether the message was sent

        Raises:
            TransportFailureError: If the hand-off fails
        """
        raise NotImplementedError


class Notifier:
    """Fire-and-forget local notification interface."""

    async def notify(
        self, title: str, body: str, data: dict[str, Any] | None = None
    ) -> None:
        """Request a notification.

        Args:
            title: Notification title
            body: Notification text
            data: Extra payload for the host app
        """
        raise NotImplementedError
