"""Mail infrastructure providers."""

from dishka import Scope, provide

from mingle.adapter.ses import SesMailSender
from mingle.config import MailSettings
from mingle.domain.service import MailSender
from mingle.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider (Amazon SES)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mail_sender(self, settings: MailSettings) -> MailSender:
        """Provide SES mail sender.

        Raises:
            ValueError: If no sender address is configured
        """
        if not settings.sender_address:
            raise ValueError("Mail sender address must be configured")
        return SesMailSender(settings)
