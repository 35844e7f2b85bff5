"""Mock email provider for testing."""

from dishka import Scope, alias, provide

from homestead.adapter.email import MockEmailSender
from homestead.domain.service import EmailSender
from homestead.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Records outgoing email instead of sending it."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> MockEmailSender:
        """Provide recording email sender."""
        return MockEmailSender()

    email_sender = alias(source=MockEmailSender, provides=EmailSender)
