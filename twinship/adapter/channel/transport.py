"""Channel transport implementations.

Email goes out over SMTP with aiosmtplib; text messages are posted to an
HTTP SMS gateway with httpx.
"""

from email.message import EmailMessage
from typing import Any

import aiosmtplib
import httpx
import logfire
from pydantic import BaseModel

from twinship.config import EmailSettings, SmsSettings
from twinship.domain.error import TransportFailureError
from twinship.domain.service.transport import ChannelTransport
from twinship.domain.value import DeliveryChannel, EmailComposeStatus, SmsComposeStatus
from twinship.util.logging import get_logger

logger = get_logger(__name__)


class SmtpHttpChannelTransport(ChannelTransport):
    """Server-side channel transport.

    There is no compose sheet on a server, so a successful hand-off is
    always reported as sent. A channel that is disabled or missing its
    endpoint reports itself unavailable.
    """

    def __init__(self, email_settings: EmailSettings, sms_settings: SmsSettings) -> None:
        """Initialize transport.

        Args:
            email_settings: SMTP configuration
            sms_settings: SMS gateway configuration
        """
        self.email_settings = email_settings
        self.sms_settings = sms_settings

    async def is_email_available(self) -> bool:
        return self.email_settings.enabled and bool(self.email_settings.host)

    async def compose_email(
        self, recipient: str, subject: str, body: str
    ) -> EmailComposeStatus:
        """Send a plain-text email over SMTP.

        Raises:
            TransportFailureError: On connection, auth or delivery errors
        """
        settings = self.email_settings
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = f"{settings.from_name} <{settings.from_email}>"
        message["To"] = recipient
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=settings.host,
                port=settings.port,
                username=settings.username,
                password=settings.password,
                start_tls=settings.use_tls,
                timeout=settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {settings.host} failed: {e}")
            raise TransportFailureError(DeliveryChannel.EMAIL.value, str(e)) from e

        logfire.info("Invitation email handed off", smtp_host=settings.host)
        return EmailComposeStatus.SENT

    async def is_sms_available(self) -> bool:
        return self.sms_settings.enabled and bool(self.sms_settings.gateway_url)

    async def compose_sms(self, recipient: str, body: str) -> SmsComposeStatus:
        """Post a text message to the SMS gateway.

        A 4xx response means the gateway refused this message and is reported
        as failed. Network errors and 5xx responses raise.

        Raises:
            TransportFailureError: If the gateway cannot be reached or errors
        """
        settings = self.sms_settings
        headers = {}
        if settings.api_key:
            headers["Authorization"] = f"Bearer {settings.api_key}"

        try:
            async with httpx.AsyncClient(timeout=settings.timeout) as client:
                response = await client.post(
                    settings.gateway_url,
                    json={"to": recipient, "from": settings.sender, "body": body},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"SMS gateway request failed: {e}")
            raise TransportFailureError(DeliveryChannel.SMS.value, str(e)) from e

        if response.is_success:
            logfire.info("Invitation SMS handed off")
            return SmsComposeStatus.SENT

        if response.is_client_error:
            logfire.warn(
                "SMS gateway rejected message", status_code=response.status_code
            )
            return SmsComposeStatus.FAILED

        raise TransportFailureError(
            DeliveryChannel.SMS.value, f"gateway returned {response.status_code}"
        )


class ComposedMessage(BaseModel):
    """A message handed to the mock transport."""

    channel: DeliveryChannel
    recipient: str
    subject: str | None = None
    body: str


class MockChannelTransport(ChannelTransport):
    """Mock channel transport for testing.

    Outcomes are scripted per channel and consumed in order; once a script
    runs out every compose succeeds. A scripted exception is raised instead
    of returning. Every composed message is recorded.
    """

    def __init__(
        self,
        email_available: bool = True,
        sms_available: bool = True,
    ) -> None:
        self.email_available = email_available
        self.sms_available = sms_available
        self.email_outcomes: list[EmailComposeStatus | Exception] = []
        self.sms_outcomes: list[SmsComposeStatus | Exception] = []
        self.messages: list[ComposedMessage] = []

    def script_email(self, *outcomes: EmailComposeStatus | Exception) -> None:
        self.email_outcomes.extend(outcomes)

    def script_sms(self, *outcomes: SmsComposeStatus | Exception) -> None:
        self.sms_outcomes.extend(outcomes)

    def sent_to(self, channel: DeliveryChannel) -> list[ComposedMessage]:
        return [m for m in self.messages if m.channel == channel]

    async def is_email_available(self) -> bool:
        return self.email_available

    async def compose_email(
        self, recipient: str, subject: str, body: str
    ) -> EmailComposeStatus:
        self.messages.append(
            ComposedMessage(
                channel=DeliveryChannel.EMAIL,
                recipient=recipient,
                subject=subject,
                body=body,
            )
        )
        return self._next(self.email_outcomes, EmailComposeStatus.SENT)

    async def is_sms_available(self) -> bool:
        return self.sms_available

    async def compose_sms(self, recipient: str, body: str) -> SmsComposeStatus:
        self.messages.append(
            ComposedMessage(channel=DeliveryChannel.SMS, recipient=recipient, body=body)
        )
        return self._next(self.sms_outcomes, SmsComposeStatus.SENT)

    @staticmethod
    def _next(outcomes: list[Any], default: Any) -> Any:
        if not outcomes:
            return default
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
