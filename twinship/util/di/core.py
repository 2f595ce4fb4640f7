"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from twinship.config import (
    DeepLinkSettings,
    EmailSettings,
    InvitationSettings,
    NotificationSettings,
    Settings,
    SmsSettings,
)
from twinship.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation lifecycle settings."""
        return settings.invitations

    @provide
    def provide_deep_link_settings(self, settings: Settings) -> DeepLinkSettings:
        """Provide deep link settings."""
        return settings.deep_links

    @provide
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Provide SMTP settings."""
        return settings.email

    @provide
    def provide_sms_settings(self, settings: Settings) -> SmsSettings:
        """Provide SMS gateway settings."""
        return settings.sms

    @provide
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        """Provide notification settings."""
        return settings.notifications
