"""Domain services."""

from .analytics_service import AnalyticsAggregator
from .base import Service
from .deep_link_service import DeepLinkHandler, DeepLinkRouter
from .dispatch_service import ChannelDispatcher
from .invitation_service import InvitationService, parse_token
from .rate_limiter import RateLimiter
from .retry_service import RetryManager
from .token_service import TokenGenerator
from .transport import ChannelTransport, Notifier

__all__ = [
    "AnalyticsAggregator",
    "ChannelDispatcher",
    "ChannelTransport",
    "DeepLinkHandler",
    "DeepLinkRouter",
    "InvitationService",
    "Notifier",
    "RateLimiter",
    "RetryManager",
    "Service",
    "TokenGenerator",
    "parse_token",
]
