"""Resend invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.domain.error import InvalidTransitionError, NotAuthorizedError
from mingle.domain.model.invitation import utcnow
from mingle.domain.service import InvitationService, MailDispatcher
from mingle.domain.value import (
    DeliveryErrorKind,
    InvitationId,
    InvitationStatus,
    UserId,
)


class ResendInvitationRequest(BaseModel):
    """Request to resend a pending invitation."""

    invitation_id: str
    user_id: str
    allow_mail_client_fallback: bool = False


class ResendInvitationResponse(BaseModel):
    """Outcome of a resend."""

    success: bool
    invitation: InvitationItem
    error: str | None = None
    error_kind: DeliveryErrorKind | None = None
    user_message: str | None = None
    mail_client_url: str | None = None


class ResendInvitationUseCase(BaseUseCase):
    """Use case for resending an invitation email.

    A resend mints a fresh token and refreshes ``sent_at`` and
    ``message_id``; id and status are unchanged.
    """

    def __init__(
        self, invitation_service: InvitationService, mail_dispatcher: MailDispatcher
    ) -> None:
        self.invitation_service = invitation_service
        self.mail_dispatcher = mail_dispatcher

    async def execute(self, request: ResendInvitationRequest) -> ResendInvitationResponse:
        """Execute resend invitation use case.

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the caller is not the inviter
            InvalidTransitionError: If the invitation is no longer pending
        """
        invitation_id = InvitationId(UUID(request.invitation_id))
        user_id = UserId(request.user_id)

        with logfire.span("resend_invitation", invitation_id=str(invitation_id)):
            invitation = await self.invitation_service.get(invitation_id)
            if invitation.inviter_id != user_id:
                raise NotAuthorizedError("invitation", str(invitation_id), user_id)
            if invitation.status != InvitationStatus.PENDING:
                raise InvalidTransitionError(invitation.status.value, "resent")

            result = await self.mail_dispatcher.send(
                recipient_email=invitation.recipient_email,
                recipient_name=invitation.recipient_name,
                inviter_name=invitation.inviter_name,
                message=invitation.message,
                inviter_avatar=invitation.inviter_avatar,
                inviter_id=invitation.inviter_id,
                allow_mail_client_fallback=request.allow_mail_client_fallback,
            )

            if not result.success:
                return ResendInvitationResponse(
                    success=False,
                    invitation=InvitationItem.from_invitation(invitation),
                    error=result.error,
                    error_kind=result.error_kind,
                    user_message=result.user_message,
                )

            updated = await self.invitation_service.record_resend(
                invitation_id, utcnow(), result.message_id, result.method
            )
            logfire.info("Invitation resent", invitation_id=str(invitation_id))
            return ResendInvitationResponse(
                success=True,
                invitation=InvitationItem.from_invitation(updated),
                error_kind=result.error_kind,
                user_message=result.user_message,
                mail_client_url=result.mail_client_url,
            )
