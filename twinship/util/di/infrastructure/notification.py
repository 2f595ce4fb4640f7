"""Notification infrastructure providers."""

from dishka import Scope, provide

from twinship.adapter.notification import LoggingNotifier, WebhookNotifier
from twinship.config import NotificationSettings
from twinship.domain.service import Notifier
from twinship.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notifier(self, notification_settings: NotificationSettings) -> Notifier:
        """Provide notifier: webhook relay when configured, log-only otherwise."""
        if notification_settings.webhook_url:
            return WebhookNotifier(notification_settings)
        return LoggingNotifier()
