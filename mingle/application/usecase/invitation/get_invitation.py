"""Get invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.application.usecase.invitation.respond_to_invitation import is_recipient
from mingle.domain.error import NotAuthorizedError
from mingle.domain.service import InvitationService, ProfileService
from mingle.domain.value import InvitationId, UserId


class GetInvitationRequest(BaseModel):
    invitation_id: str
    user_id: str
    user_email: str | None = None


class GetInvitationUseCase(BaseUseCase):
    """Use case for the accept/decline landing pages.

    Visible to the inviter and to the recipient.
    """

    def __init__(
        self, invitation_service: InvitationService, profile_service: ProfileService
    ) -> None:
        self.invitation_service = invitation_service
        self.profile_service = profile_service

    async def execute(self, request: GetInvitationRequest) -> InvitationItem:
        """Execute get invitation use case.

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the caller is neither inviter nor recipient
        """
        invitation_id = InvitationId(UUID(request.invitation_id))
        user_id = UserId(request.user_id)

        invitation = await self.invitation_service.get(invitation_id)
        if invitation.inviter_id != user_id and not is_recipient(
            invitation, user_id, request.user_email
        ):
            raise NotAuthorizedError("invitation", str(invitation_id), user_id)

        avatar_url = await self.profile_service.avatar_url(invitation.inviter_avatar)
        return InvitationItem.from_invitation(invitation, inviter_avatar_url=avatar_url)
