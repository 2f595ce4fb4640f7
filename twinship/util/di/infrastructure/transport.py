"""Channel transport infrastructure providers."""

from dishka import Scope, provide

from twinship.adapter.channel import SmtpHttpChannelTransport
from twinship.config import EmailSettings, SmsSettings
from twinship.domain.service import ChannelTransport
from twinship.util.di.base import ProviderBase
from twinship.util.observability import instrument_httpx


class TransportProvider(ProviderBase):
    """Channel transport component base."""

    __mock_component__ = "transport"


class ProdTransportProvider(TransportProvider):
    """Production transport provider (SMTP email, HTTP SMS gateway)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_channel_transport(
        self, email_settings: EmailSettings, sms_settings: SmsSettings
    ) -> ChannelTransport:
        """Provide channel transport.

        Channels that are disabled in settings report themselves unavailable.
        """
        if sms_settings.enabled:
            instrument_httpx()
        return SmtpHttpChannelTransport(
            email_settings=email_settings, sms_settings=sms_settings
        )
