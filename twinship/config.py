"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InvitationSettings(BaseModel):
    """Invitation lifecycle configuration."""

    # Invitations expire 7 days after creation
    expiry_hours: int = 168

    # Delivery failures allowed before retries are refused
    max_attempts: int = 3

    # Creation rate limit: at most max_invites_per_window per rolling window
    rate_limit_window_seconds: int = 3600
    max_invites_per_window: int = 5

    # Records older than this are pruned at startup
    retention_days: int = 30

    # Analytics "recent invitations" window and cap
    recent_window_days: int = 7
    recent_limit: int = 10

    # Provenance stamped into invitation metadata (diagnostics only)
    app_version: str = "1.0.0"
    platform: str = "mobile"


class DeepLinkSettings(BaseModel):
    """Deep link configuration."""

    # Custom URL scheme registered by the host app
    scheme: str = "twinshipvibe"

    # Web fallback used when the app cannot be opened directly
    web_url: str = "https://twinshipvibe.app"


class StorageSettings(BaseModel):
    """Durable key-value storage configuration."""

    url: str = "sqlite+aiosqlite:///./twinship.db"

    # Well-known keys in the key-value store
    invitations_key: str = "twinship_invitations"
    pending_link_key: str = "twinship_pending_invitation"


class EmailSettings(BaseModel):
    """SMTP configuration for the email channel."""

    enabled: bool = False
    host: str = "localhost"
    port: int = 587
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    from_email: str = "invites@twinshipvibe.app"
    from_name: str = "Twinship"
    timeout: int = 10


class SmsSettings(BaseModel):
    """HTTP SMS gateway configuration for the text message channel."""

    enabled: bool = False
    gateway_url: str | None = None
    api_key: str | None = None
    sender: str = "Twinship"
    timeout: float = 10.0


class NotificationSettings(BaseModel):
    """Local notification relay configuration."""

    # When unset, notifications are only logged
    webhook_url: str | None = None
    timeout: float = 5.0


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Loaded from environment variables and an optional .env file. Nested
    groups use ``__`` as delimiter:

        INVITATIONS__MAX_ATTEMPTS=3
        STORAGE__URL=sqlite+aiosqlite:///./twinship.db
        EMAIL__ENABLED=true
        EMAIL__HOST=smtp.example.com
        SMS__GATEWAY_URL=https://sms.example.com/messages
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000

    invitations: InvitationSettings = InvitationSettings()
    deep_links: DeepLinkSettings = DeepLinkSettings()
    storage: StorageSettings = StorageSettings()
    email: EmailSettings = EmailSettings()
    sms: SmsSettings = SmsSettings()
    notifications: NotificationSettings = NotificationSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def load_version(self) -> "Settings":
        """Load git SHA from the version file when present."""
        if self.git_sha == "unknown":
            self.git_sha = self._load_git_sha()
        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        return "unknown"
