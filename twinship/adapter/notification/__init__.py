"""Notification adapters."""

from .notifier import LoggingNotifier, RecordingNotifier, WebhookNotifier

__all__ = ["LoggingNotifier", "RecordingNotifier", "WebhookNotifier"]
