"""Notification sinks.

Notifications are fire-and-forget. The lifecycle service logs and swallows
any error raised here.
"""

from typing import Any

import httpx
import logfire

from twinship.config import NotificationSettings
from twinship.domain.service.transport import Notifier


class LoggingNotifier(Notifier):
    """Records notifications as log events only."""

    async def notify(
        self, title: str, body: str, data: dict[str, Any] | None = None
    ) -> None:
        logfire.info("Notification", title=title, body=body, **(data or {}))


class WebhookNotifier(Notifier):
    """Relays notifications to the host app over an HTTP webhook."""

    def __init__(self, notification_settings: NotificationSettings) -> None:
        """Initialize notifier.

        Args:
            notification_settings: Webhook URL and timeout
        """
        if not notification_settings.webhook_url:
            raise ValueError("Notification webhook URL must be configured")
        self.webhook_url = notification_settings.webhook_url
        self.timeout = notification_settings.timeout

    async def notify(
        self, title: str, body: str, data: dict[str, Any] | None = None
    ) -> None:
        """POST the notification to the webhook.

        Raises:
            httpx.HTTPError: If the webhook cannot be reached or rejects it
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.webhook_url,
                json={"title": title, "body": body, "data": data or {}},
            )
            response.raise_for_status()


class RecordingNotifier(Notifier):
    """Keeps every notification in memory for testing."""

    def __init__(self) -> None:
        self.notifications: list[tuple[str, str, dict[str, Any]]] = []

    async def notify(
        self, title: str, body: str, data: dict[str, Any] | None = None
    ) -> None:
        self.notifications.append((title, body, data or {}))

    @property
    def titles(self) -> list[str]:
        return [title for title, _, _ in self.notifications]
