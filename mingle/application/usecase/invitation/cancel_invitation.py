"""Cancel invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.domain.error import NotAuthorizedError
from mingle.domain.service import ConnectionService, InvitationService
from mingle.domain.value import InvitationId, InvitationStatus, UserId


class CancelInvitationRequest(BaseModel):
    invitation_id: str
    user_id: str


class CancelInvitationResponse(BaseModel):
    invitation: InvitationItem


class CancelInvitationUseCase(BaseUseCase):
    """Use case for an inviter withdrawing a pending invitation."""

    def __init__(
        self,
        invitation_service: InvitationService,
        connection_service: ConnectionService,
    ) -> None:
        self.invitation_service = invitation_service
        self.connection_service = connection_service

    async def execute(self, request: CancelInvitationRequest) -> CancelInvitationResponse:
        """Execute cancel invitation use case.

        The friend request that came with the invitation is withdrawn too.

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the caller is not the inviter
            InvalidTransitionError: If the invitation is no longer pending
        """
        invitation_id = InvitationId(UUID(request.invitation_id))
        user_id = UserId(request.user_id)

        with logfire.span("cancel_invitation", invitation_id=str(invitation_id)):
            invitation = await self.invitation_service.get(invitation_id)
            if invitation.inviter_id != user_id:
                raise NotAuthorizedError("invitation", str(invitation_id), user_id)

            cancelled = await self.invitation_service.update_status(
                invitation_id, InvitationStatus.CANCELLED
            )
            await self.connection_service.withdraw_friend_request(cancelled)
            return CancelInvitationResponse(
                invitation=InvitationItem.from_invitation(cancelled)
            )
