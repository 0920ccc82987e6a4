"""Invitation reconciliation sweep use case."""

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.domain.error import PersistenceError
from mingle.domain.service import ConnectionService, InvitationService
from mingle.domain.value import UserId


class SyncInvitationsRequest(BaseModel):
    """Sweep options."""

    # None sweeps every inviter with a mirrored list
    inviter_ids: list[str] | None = None
    expire_stale: bool = True


class SyncInvitationsResponse(BaseModel):
    synced: int
    expired: int


class SyncInvitationsUseCase(BaseUseCase):
    """Use case for the periodic sweep.

    Pushes locally held invitations to the record store and expires
    pending invitations older than the configured age, withdrawing their
    friend requests.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        connection_service: ConnectionService,
    ) -> None:
        self.invitation_service = invitation_service
        self.connection_service = connection_service

    async def execute(self, request: SyncInvitationsRequest) -> SyncInvitationsResponse:
        if request.inviter_ids is not None:
            inviter_ids = [UserId(i) for i in request.inviter_ids]
        else:
            inviter_ids = self.invitation_service.mirrored_inviters()

        with logfire.span("sync_invitations", inviters=len(inviter_ids)):
            synced = 0
            for inviter_id in inviter_ids:
                synced += await self.invitation_service.sync_pending(inviter_id)

            expired = 0
            if request.expire_stale:
                try:
                    stale = await self.invitation_service.expire_stale()
                except PersistenceError as e:
                    logfire.error("Expiry sweep skipped", error=str(e))
                    stale = []
                for invitation in stale:
                    await self.connection_service.withdraw_friend_request(invitation)
                expired = len(stale)

            return SyncInvitationsResponse(synced=synced, expired=expired)
