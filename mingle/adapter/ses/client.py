"""Amazon SES transactional email sender.

boto3 is synchronous, so every call runs in a worker thread.
"""

import asyncio
from email.message import EmailMessage

import boto3
import logfire
from botocore.exceptions import BotoCoreError, ClientError

from mingle.config import MailSettings
from mingle.domain.error import (
    ConfigurationSetRejectedError,
    DeliveryError,
    MailProviderError,
    RecipientNotVerifiedError,
    SenderNotVerifiedError,
)
from mingle.domain.service.mail_dispatcher import MailSender, OutgoingEmail

_CONFIGURATION_SET_CODES = {
    "ConfigurationSetDoesNotExist",
    "ConfigurationSetDoesNotExistException",
    "ConfigurationSetSendingPausedException",
}


def map_client_error(error: ClientError, sender: str) -> DeliveryError:
    """Classify an SES ClientError.

    SES reports both unverified senders and (in sandbox mode) unverified
    recipients as ``MessageRejected``; the message names the identity that
    failed the check.
    """
    details = error.response.get("Error", {})
    code = details.get("Code", "Unknown")
    message = details.get("Message", str(error))
    lowered = message.lower()

    if code in _CONFIGURATION_SET_CODES or "configuration set" in lowered:
        return ConfigurationSetRejectedError(message, code)
    if code == "MailFromDomainNotVerifiedException":
        return SenderNotVerifiedError(message, code)
    if code == "MessageRejected" and "not verified" in lowered:
        if sender.lower() in lowered:
            return SenderNotVerifiedError(message, code)
        return RecipientNotVerifiedError(message, code)
    return MailProviderError(message, code)


def build_mime(email: OutgoingEmail) -> EmailMessage:
    """Build a multipart/alternative message with text and HTML parts."""
    message = EmailMessage()
    message["Subject"] = email.subject
    message["From"] = email.sender
    message["To"] = email.recipient
    message.set_content(email.text_body)
    message.add_alternative(email.html_body, subtype="html")
    return message


class SesMailSender(MailSender):
    """Sends invitation emails through Amazon SES."""

    def __init__(self, settings: MailSettings) -> None:
        """Initialize SES sender.

        Args:
            settings: Mail settings (region, sender)
        """
        self.settings = settings
        self.client = boto3.client("ses", region_name=settings.aws_region)

    async def send(self, email: OutgoingEmail) -> str:
        kwargs = {
            "Source": email.sender,
            "Destination": {"ToAddresses": [email.recipient]},
            "Message": {
                "Subject": {"Data": email.subject, "Charset": "UTF-8"},
                "Body": {
                    "Html": {"Data": email.html_body, "Charset": "UTF-8"},
                    "Text": {"Data": email.text_body, "Charset": "UTF-8"},
                },
            },
        }
        if email.configuration_set:
            kwargs["ConfigurationSetName"] = email.configuration_set

        with logfire.span("ses.send_email", recipient=email.recipient):
            response = await self._call(self.client.send_email, email.sender, **kwargs)
            return response["MessageId"]

    async def send_raw(self, email: OutgoingEmail) -> str:
        message = build_mime(email)
        with logfire.span("ses.send_raw_email", recipient=email.recipient):
            response = await self._call(
                self.client.send_raw_email,
                email.sender,
                Source=email.sender,
                Destinations=[email.recipient],
                RawMessage={"Data": message.as_bytes()},
            )
            return response["MessageId"]

    async def _call(self, method, sender: str, **kwargs) -> dict:
        try:
            return await asyncio.to_thread(method, **kwargs)
        except ClientError as e:
            error = map_client_error(e, sender)
            logfire.error(
                "SES rejected message",
                code=error.code,
                kind=error.__class__.__name__,
                error=str(error),
            )
            raise error from e
        except BotoCoreError as e:
            logfire.error("SES request failed", error=str(e))
            raise MailProviderError(str(e)) from e


class MockMailSender(MailSender):
    """Mock sender for testing.

    Records every message and returns deterministic ids. Set ``send_error``
    or ``send_raw_error`` to make the next calls fail.
    """

    def __init__(self) -> None:
        self.sent: list[OutgoingEmail] = []
        self.sent_raw: list[OutgoingEmail] = []
        self.send_error: DeliveryError | None = None
        self.send_raw_error: DeliveryError | None = None

    async def send(self, email: OutgoingEmail) -> str:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(email)
        return f"mock-message-{len(self.sent) + len(self.sent_raw)}"

    async def send_raw(self, email: OutgoingEmail) -> str:
        if self.send_raw_error is not None:
            raise self.send_raw_error
        self.sent_raw.append(email)
        return f"mock-raw-message-{len(self.sent) + len(self.sent_raw)}"
