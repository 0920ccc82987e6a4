"""Send invitation use case."""

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.config import Settings
from mingle.domain.error import DuplicateInvitationError, ValidationError
from mingle.domain.service import (
    InvitationService,
    MailDispatcher,
    ProfileService,
    parse_email,
)
from mingle.domain.value import DeliveryErrorKind, DeliveryMethod, UserId


class SendInvitationRequest(BaseModel):
    """Request to invite someone by email."""

    inviter_id: str
    inviter_username: str | None = None
    inviter_email: str | None = None
    recipient_email: str
    recipient_name: str | None = None
    message: str | None = None
    # None defers to the configured default
    allow_mail_client_fallback: bool | None = None


class SendInvitationResponse(BaseModel):
    """Outcome of an invitation send.

    ``invitation`` is only set when the email was handed to the provider
    or to the sender's mail client.
    """

    success: bool
    invitation: InvitationItem | None = None
    method: DeliveryMethod | None = None
    error: str | None = None
    error_kind: DeliveryErrorKind | None = None
    user_message: str | None = None
    mail_client_url: str | None = None


class SendInvitationUseCase(BaseUseCase):
    """Use case for inviting a friend by email."""

    def __init__(
        self,
        invitation_service: InvitationService,
        mail_dispatcher: MailDispatcher,
        profile_service: ProfileService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            mail_dispatcher: Invitation email dispatcher
            profile_service: Profile domain service
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.mail_dispatcher = mail_dispatcher
        self.profile_service = profile_service
        self.settings = settings

    async def execute(self, request: SendInvitationRequest) -> SendInvitationResponse:
        """Execute send invitation use case.

        Raises:
            ValidationError: If the email is malformed or addressed to the inviter
            DuplicateInvitationError: If a pending invitation already exists
        """
        if not request.inviter_id:
            raise ValidationError("Inviter id is required")
        inviter_id = UserId(request.inviter_id)
        email = parse_email(request.recipient_email)

        if request.inviter_email and request.inviter_email.strip().lower() == email.root:
            raise ValidationError("You cannot invite yourself")

        with logfire.span(
            "send_invitation",
            inviter_id=str(inviter_id),
            recipient_email=email.root,
        ):
            if await self.invitation_service.has_pending(inviter_id, email):
                logfire.warn("Duplicate invitation", recipient_email=email.root)
                raise DuplicateInvitationError(email.root)

            inviter_name = await self.profile_service.display_name(
                inviter_id, fallback=request.inviter_username
            )
            inviter_avatar = await self.profile_service.avatar_key(inviter_id)

            allow_fallback = request.allow_mail_client_fallback
            if allow_fallback is None:
                allow_fallback = self.settings.invitations.allow_mail_client_fallback

            result = await self.mail_dispatcher.send(
                recipient_email=email,
                recipient_name=request.recipient_name,
                inviter_name=inviter_name,
                message=request.message,
                inviter_avatar=inviter_avatar,
                inviter_id=inviter_id,
                allow_mail_client_fallback=allow_fallback,
            )

            if not result.success:
                logfire.warn(
                    "Invitation not created, delivery failed",
                    error_kind=result.error_kind.value if result.error_kind else None,
                )
                return SendInvitationResponse(
                    success=False,
                    error=result.error,
                    error_kind=result.error_kind,
                    user_message=result.user_message,
                )

            invitation = await self.invitation_service.create(
                inviter_id=inviter_id,
                recipient_email=email,
                inviter_name=inviter_name,
                inviter_avatar=inviter_avatar,
                recipient_name=request.recipient_name,
                message=request.message,
                message_id=result.message_id,
                delivery_method=result.method,
            )

            return SendInvitationResponse(
                success=True,
                invitation=InvitationItem.from_invitation(invitation),
                method=result.method,
                error=result.error,
                error_kind=result.error_kind,
                user_message=result.user_message,
                mail_client_url=result.mail_client_url,
            )
