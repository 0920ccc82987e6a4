"""Invitation email dispatch."""

from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote, urlencode

import logfire
from jinja2 import Environment, FileSystemLoader, select_autoescape

from mingle.config import Settings
from mingle.domain.error import (
    CacheError,
    ConfigurationSetRejectedError,
    DeliveryError,
    RecipientNotVerifiedError,
    SenderNotVerifiedError,
)
from mingle.domain.value import (
    DeliveryErrorKind,
    DeliveryMethod,
    EmailAddress,
    InvitationToken,
    UserId,
)
from mingle.domain.value.common import ValueObject

from .base import Service
from .notification_service import NotificationService
from .profile_service import ProfileService
from .token_codec import TokenCodec

TEMPLATE_DIR = Path(__file__).parent / "templates"


class OutgoingEmail(ValueObject):
    """Rendered message ready for the transactional sender."""

    sender: str
    recipient: str
    subject: str
    html_body: str
    text_body: str
    configuration_set: str | None = None


class DeliveryResult(ValueObject):
    """Outcome of one dispatch attempt."""

    success: bool
    method: DeliveryMethod | None = None
    message_id: str | None = None
    error: str | None = None
    error_kind: DeliveryErrorKind | None = None
    token: InvitationToken | None = None
    mail_client_url: str | None = None

    @property
    def user_message(self) -> str | None:
        return self.error_kind.user_message if self.error_kind else None


class MailSender(ABC):
    """Transactional email sender interface."""

    @abstractmethod
    async def send(self, email: OutgoingEmail) -> str:
        """Submit a structured message.

        Args:
            email: Rendered message

        Returns:
            Provider message id

        Raises:
            DeliveryError: Subclass describing the failure
        """
        pass

    @abstractmethod
    async def send_raw(self, email: OutgoingEmail) -> str:
        """Submit the message as raw MIME, without a configuration set.

        Returns:
            Provider message id

        Raises:
            DeliveryError: Subclass describing the failure
        """
        pass


def _error_kind(error: DeliveryError) -> DeliveryErrorKind:
    if isinstance(error, SenderNotVerifiedError):
        return DeliveryErrorKind.SENDER_NOT_VERIFIED
    if isinstance(error, RecipientNotVerifiedError):
        return DeliveryErrorKind.RECIPIENT_NOT_VERIFIED
    if isinstance(error, ConfigurationSetRejectedError):
        return DeliveryErrorKind.CONFIGURATION_REJECTED
    return DeliveryErrorKind.PROVIDER_ERROR


class MailDispatcher(Service):
    """Renders and delivers invitation emails.

    Delivery errors never escape: every attempt ends in a DeliveryResult.
    """

    def __init__(
        self,
        mail_sender: MailSender,
        token_codec: TokenCodec,
        notification_service: NotificationService,
        profile_service: ProfileService,
        settings: Settings,
    ) -> None:
        """Initialize mail dispatcher.

        Args:
            mail_sender: Transactional email sender
            token_codec: Invitation token codec
            notification_service: Feed used for pending friend requests
            profile_service: Resolves existing users and avatar URLs
            settings: Application settings
        """
        self.mail_sender = mail_sender
        self.token_codec = token_codec
        self.notification_service = notification_service
        self.profile_service = profile_service
        self.mail_settings = settings.mail
        self.invitation_settings = settings.invitations
        self.frontend_url = settings.api.frontend_url
        self.templates = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "html.j2"]),
        )

    def subject_for(self, inviter_name: str) -> str:
        return f"{inviter_name} invited you to join {self.mail_settings.app_name}"

    def render(
        self,
        token: InvitationToken,
        recipient_email: EmailAddress,
        recipient_name: str,
        inviter_name: str,
        message: str | None,
        inviter_avatar_url: str | None = None,
    ) -> OutgoingEmail:
        """Render the invitation for ``token``.

        Both bodies carry a sign-up link and a sign-in link for recipients
        who already have an account.
        """
        query = urlencode({"invitation": token.root})
        subject = self.subject_for(inviter_name)
        context = {
            "subject": subject,
            "app_name": self.mail_settings.app_name,
            "inviter_name": inviter_name,
            "recipient_name": recipient_name,
            "message": message.strip() if message and message.strip() else None,
            "inviter_avatar_url": inviter_avatar_url,
            "sign_up_url": f"{self.frontend_url}/auth/sign-up?{query}",
            "sign_in_url": f"{self.frontend_url}/auth/sign-in?{query}",
            "ttl_days": self.invitation_settings.token_ttl_days,
        }
        return OutgoingEmail(
            sender=self.mail_settings.sender_address,
            recipient=recipient_email.root,
            subject=subject,
            html_body=self.templates.get_template("invitation.html.j2").render(**context),
            text_body=self.templates.get_template("invitation.txt.j2").render(**context),
            configuration_set=self.mail_settings.configuration_set,
        )

    @staticmethod
    def mail_client_url(email: OutgoingEmail) -> str:
        """Pre-filled ``mailto:`` URL for the sender's own mail client."""
        return (
            f"mailto:{quote(email.recipient, safe='@')}"
            f"?subject={quote(email.subject)}&body={quote(email.text_body)}"
        )

    async def send(
        self,
        recipient_email: EmailAddress,
        recipient_name: str | None,
        inviter_name: str | None,
        message: str | None,
        inviter_avatar: str | None = None,
        inviter_id: UserId | None = None,
        allow_mail_client_fallback: bool = False,
    ) -> DeliveryResult:
        """Mint a token, render the invitation and deliver it.

        A configuration-set rejection is retried once as a raw message. Any
        other failure returns a failed result, or a mail-client URL when the
        fallback is allowed.

        Args:
            recipient_email: Normalized recipient email
            recipient_name: Recipient display name (email local-part when None)
            inviter_name: Inviter display name (placeholder when None)
            message: Optional personal message
            inviter_avatar: Inviter's avatar storage key
            inviter_id: Inviter's user id; enables the friend-request side effect,
                which runs whatever the delivery outcome
            allow_mail_client_fallback: Whether to fall back to ``mailto:``

        Returns:
            Delivery result
        """
        inviter_name = inviter_name or self.invitation_settings.default_inviter_name
        recipient_name = recipient_name or recipient_email.local_part

        with logfire.span(
            "mail_dispatcher.send",
            recipient_email=recipient_email.root,
            inviter_id=str(inviter_id) if inviter_id else None,
        ):
            token = self.token_codec.mint(
                inviter_name=inviter_name,
                recipient_name=recipient_name,
                recipient_email=recipient_email,
                inviter_avatar=inviter_avatar,
            )
            avatar_url = await self.profile_service.avatar_url(inviter_avatar)
            email = self.render(
                token, recipient_email, recipient_name, inviter_name, message, avatar_url
            )

            result = await self._deliver(email, token, allow_mail_client_fallback)

            if inviter_id is not None:
                await self._record_friend_request(
                    recipient_email, inviter_id, inviter_name, inviter_avatar, avatar_url
                )

            return result

    async def _deliver(
        self, email: OutgoingEmail, token: InvitationToken, allow_fallback: bool
    ) -> DeliveryResult:
        try:
            message_id = await self.mail_sender.send(email)
            logfire.info("Invitation email sent", recipient=email.recipient, message_id=message_id)
            return DeliveryResult(
                success=True,
                method=DeliveryMethod.PROVIDER,
                message_id=message_id,
                token=token,
            )
        except ConfigurationSetRejectedError as e:
            logfire.warn("Configuration set rejected, retrying raw", error=str(e))
            failure = e
        except DeliveryError as e:
            logfire.error("Invitation email failed", error=str(e), code=e.code)
            return self._failed(email, token, e, allow_fallback)

        try:
            message_id = await self.mail_sender.send_raw(email)
            logfire.info(
                "Invitation email sent raw", recipient=email.recipient, message_id=message_id
            )
            return DeliveryResult(
                success=True,
                method=DeliveryMethod.PROVIDER_RAW,
                message_id=message_id,
                token=token,
            )
        except DeliveryError as e:
            logfire.error(
                "Raw invitation email failed",
                error=str(e),
                code=e.code,
                first_error=str(failure),
            )
            return self._failed(email, token, e, allow_fallback)

    def _failed(
        self,
        email: OutgoingEmail,
        token: InvitationToken,
        error: DeliveryError,
        allow_fallback: bool,
    ) -> DeliveryResult:
        if allow_fallback:
            logfire.info("Falling back to mail client", recipient=email.recipient)
            return DeliveryResult(
                success=True,
                method=DeliveryMethod.MAIL_CLIENT,
                error=str(error),
                error_kind=DeliveryErrorKind.MAIL_CLIENT_FALLBACK_USED,
                token=token,
                mail_client_url=self.mail_client_url(email),
            )
        return DeliveryResult(
            success=False,
            error=str(error),
            error_kind=_error_kind(error),
            token=token,
        )

    async def _record_friend_request(
        self,
        recipient_email: EmailAddress,
        inviter_id: UserId,
        inviter_name: str,
        inviter_avatar: str | None,
        avatar_url: str | None,
    ) -> None:
        # Best-effort: the email outcome stands whatever happens here
        try:
            self.notification_service.register_pending_friend_request(
                recipient_email, inviter_id, inviter_name, inviter_avatar
            )
            user_id = await self.profile_service.find_user_id_by_email(recipient_email)
            if user_id is not None:
                self.notification_service.deliver_pending_friend_requests(
                    recipient_email, user_id, avatars={inviter_id: avatar_url}
                )
        except CacheError as e:
            logfire.warn(
                "Friend request side effect failed",
                recipient_email=recipient_email.root,
                error=str(e),
            )
