"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from mingle.domain.error import DuplicateInvitationError
from mingle.domain.model import Invitation
from mingle.domain.repository.invitation import InvitationRepository
from mingle.domain.value import EmailAddress, InvitationId, InvitationStatus, UserId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_inviter(
        self, inviter_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        found = [
            i
            for i in self._invitations.values()
            if i.inviter_id == inviter_id and (status is None or i.status == status)
        ]
        return sorted(found, key=lambda i: i.sent_at, reverse=True)

    async def find_by_recipient_email(
        self, email: EmailAddress, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        found = [
            i
            for i in self._invitations.values()
            if i.recipient_email == email and (status is None or i.status == status)
        ]
        return sorted(found, key=lambda i: i.sent_at)

    async def find_pending(
        self, inviter_id: UserId, email: EmailAddress
    ) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if (
                invitation.inviter_id == inviter_id
                and invitation.recipient_email == email
                and invitation.is_pending
            ):
                return invitation
        return None

    async def find_pending_sent_before(self, cutoff: datetime) -> list[Invitation]:
        return [
            i for i in self._invitations.values() if i.is_pending and i.sent_at < cutoff
        ]

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            DuplicateInvitationError: If another pending invitation exists for the pair
        """
        if invitation.is_pending:
            pending = await self.find_pending(invitation.inviter_id, invitation.recipient_email)
            if pending and pending.id != invitation.id:
                raise DuplicateInvitationError(invitation.recipient_email.root)

        self._invitations[invitation.id] = invitation
        return invitation
