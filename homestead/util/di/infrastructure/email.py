"""Email infrastructure providers."""

from dishka import Scope, provide
import logfire

from homestead.adapter.email import NullEmailSender, SmtpEmailSender
from homestead.config import EmailSettings
from homestead.domain.service import EmailSender
from homestead.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider.

    Uses SMTP when configured; otherwise invite emails are skipped.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: EmailSettings) -> EmailSender:
        """Provide outbound email sender."""
        if not settings.configured:
            logfire.info("SMTP not configured, invite emails disabled")
            return NullEmailSender()
        return SmtpEmailSender(settings)
