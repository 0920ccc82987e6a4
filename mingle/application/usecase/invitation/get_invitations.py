"""Get invitations use case."""

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.domain.error import PersistenceError
from mingle.domain.service import InvitationService
from mingle.domain.value import InvitationStatus, UserId


class GetInvitationsRequest(BaseModel):
    """Request for an inviter's sent invitations."""

    inviter_id: str
    status: InvitationStatus | None = None


class GetInvitationsResponse(BaseModel):
    invitations: list[InvitationItem]
    # True when the record store was unreachable and the local mirror answered
    from_cache: bool = False


class GetInvitationsUseCase(BaseUseCase):
    """Use case for the "sent invitations" view.

    Locally held invitations are pushed to the record store first, then
    the mirror is rebuilt from the store. Cancelled invitations are only
    returned when asked for explicitly.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationsRequest) -> GetInvitationsResponse:
        inviter_id = UserId(request.inviter_id)

        with logfire.span("get_invitations", inviter_id=str(inviter_id)):
            await self.invitation_service.sync_pending(inviter_id)

            from_cache = False
            try:
                if request.status == InvitationStatus.CANCELLED:
                    invitations = await self.invitation_service.list(
                        inviter_id, InvitationStatus.CANCELLED
                    )
                else:
                    invitations = await self.invitation_service.refresh_mirror(inviter_id)
            except PersistenceError as e:
                logfire.warn("Serving invitations from mirror", error=str(e))
                invitations = self.invitation_service.mirror_get_all(inviter_id)
                from_cache = True

            if request.status is not None:
                invitations = [i for i in invitations if i.status == request.status]

            return GetInvitationsResponse(
                invitations=[InvitationItem.from_invitation(i) for i in invitations],
                from_cache=from_cache,
            )
