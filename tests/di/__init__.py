"""Mock providers for testing.

Importing this package defines the mock subclasses that
``twinship.util.di.get_provider`` selects from.
"""

from .clock import MockClockProvider
from .container import build_test_container
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .transport import MockTransportProvider

__all__ = [
    "MockClockProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "MockTransportProvider",
    "build_test_container",
]
