"""Invitation repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime

from mingle.domain.model.invitation import Invitation
from mingle.domain.value import EmailAddress, InvitationId, InvitationStatus, UserId


class InvitationRepository(ABC):
    """Durable invitation records in the structured record store.

    Implementations raise StoreUnavailableError when the store cannot be
    reached and FieldRejectedError when its schema refuses an optional field.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_inviter(
        self, inviter_id: UserId, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        """Find invitations created by an inviter, newest first.

        Args:
            inviter_id: The inviter's ID
            status: Optional status filter

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_by_recipient_email(
        self, email: EmailAddress, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        """Find invitations addressed to an email, from any inviter.

        Args:
            email: Normalized recipient email
            status: Optional status filter

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_pending(
        self, inviter_id: UserId, email: EmailAddress
    ) -> Invitation | None:
        """Find the pending invitation for an (inviter, recipient) pair.

        Args:
            inviter_id: The inviter's ID
            email: Normalized recipient email

        Returns:
            The pending invitation if any
        """
        pass

    @abstractmethod
    async def find_pending_sent_before(self, cutoff: datetime) -> list[Invitation]:
        """Find pending invitations last sent before ``cutoff``.

        Used by the expiry sweep.
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation
        """
        pass


class InvitationMirror(ABC):
    """Local cache of an inviter's sent invitations.

    Synchronous so the "sent invitations" view never waits on the backend.
    """

    @abstractmethod
    def get_all(self, inviter_id: UserId) -> list[Invitation]:
        pass

    @abstractmethod
    def save_all(self, inviter_id: UserId, invitations: list[Invitation]) -> None:
        """Overwrite the inviter's mirrored list."""
        pass

    @abstractmethod
    def add(self, invitation: Invitation) -> None:
        """Insert or replace one invitation."""
        pass

    @abstractmethod
    def remove(self, inviter_id: UserId, invitation_id: InvitationId) -> bool:
        """Remove by id. Returns whether anything was removed."""
        pass

    @abstractmethod
    def inviters(self) -> list[UserId]:
        """Inviters with a mirrored list, for reconciliation sweeps."""
        pass
