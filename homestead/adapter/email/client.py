"""Outbound email senders.

SMTP delivery runs in a worker thread so the event loop never blocks on
the mail server.
"""

import asyncio
import smtplib
from email.message import EmailMessage

import logfire

from homestead.adapter.error import ProviderError
from homestead.config import EmailSettings
from homestead.domain.service.notification_service import EmailSender


class EmailDeliveryError(ProviderError):
    """Email could not be delivered."""

    pass


class SmtpEmailSender(EmailSender):
    """Email sender backed by an SMTP server."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP sender.

        Args:
            settings: Email settings with host, port, credentials and sender
        """
        if not settings.configured:
            raise ValueError("SMTP host and sender must be configured")
        self.settings = settings

    async def send(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text email over SMTP."""
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.settings.sender
        message["To"] = to
        message.set_content(body)

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(str(e)) from e

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.smtp_host, self.settings.smtp_port, timeout=10
        ) as server:
            if self.settings.use_tls:
                server.starttls()
            if self.settings.smtp_username and self.settings.smtp_password:
                server.login(self.settings.smtp_username, self.settings.smtp_password)
            server.send_message(message)


class NullEmailSender(EmailSender):
    """Sender used when no mail transport is configured."""

    async def send(self, to: str, subject: str, body: str) -> None:
        """Skip delivery."""
        logfire.debug("Email transport not configured, skipping", subject=subject)


class MockEmailSender(EmailSender):
    """In-memory sender for testing.

    Records sent messages; set ``fail`` to simulate a transport outage.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    async def send(self, to: str, subject: str, body: str) -> None:
        """Record the email, or raise when failing."""
        if self.fail:
            raise EmailDeliveryError("Mock transport failure")
        self.sent.append((to, subject, body))
