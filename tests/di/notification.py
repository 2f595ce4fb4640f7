"""Mock notification providers for testing."""

from dishka import Scope, provide

from twinship.adapter.notification import RecordingNotifier
from twinship.domain.service import Notifier
from twinship.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Mock notification provider recording every notification."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_recording_notifier(self) -> RecordingNotifier:
        """Provide recording notifier."""
        return RecordingNotifier()

    @provide(scope=Scope.APP)
    def get_notifier(self, notifier: RecordingNotifier) -> Notifier:
        """Expose the recorder as the notifier."""
        return notifier
