"""Channel transport adapters."""

from .transport import ComposedMessage, MockChannelTransport, SmtpHttpChannelTransport

__all__ = ["ComposedMessage", "MockChannelTransport", "SmtpHttpChannelTransport"]
