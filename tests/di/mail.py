"""Mock mail providers for testing."""

from dishka import Scope, provide

from mingle.adapter.ses import MockMailSender
from mingle.domain.service import MailSender
from mingle.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider recording sent messages."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mail_sender(self) -> MailSender:
        """Provide mock mail sender."""
        return MockMailSender()
