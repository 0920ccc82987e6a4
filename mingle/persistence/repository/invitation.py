"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mingle.domain.error import DuplicateInvitationError, FieldRejectedError
from mingle.domain.model import Invitation
from mingle.domain.repository import InvitationRepository
from mingle.domain.value import EmailAddress, InvitationId, InvitationStatus, UserId
from mingle.persistence.mappers import invitation_to_dict, row_to_invitation
from mingle.persistence.repository.error import store_errors
from mingle.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch(self, stmt) -> list[Invitation]:
        async with store_errors("invitations.select"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_invitation(dict(row)) for row in rows]

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        found = await self._fetch(stmt)
        return found[0] if found else None

    async def find_by_inviter(
        self, inviter_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.inviter_id == inviter_id)
            .order_by(invitations_table.c.sent_at.desc())
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)
        return await self._fetch(stmt)

    async def find_by_recipient_email(
        self, email: EmailAddress, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.recipient_email == email.root)
            .order_by(invitations_table.c.sent_at.asc())
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)
        return await self._fetch(stmt)

    async def find_pending(
        self, inviter_id: UserId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Critical path for the duplicate guard, served by the partial unique index."""
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.inviter_id == inviter_id,
                invitations_table.c.recipient_email == email.root,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        found = await self._fetch(stmt)
        return found[0] if found else None

    async def find_pending_sent_before(self, cutoff: datetime) -> list[Invitation]:
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.status == InvitationStatus.PENDING.value,
                invitations_table.c.sent_at < cutoff,
            )
        )
        return await self._fetch(stmt)

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Writes run in a savepoint so a rejected statement leaves the
        request transaction usable.

        Raises:
            DuplicateInvitationError: If another pending invitation exists for the pair
            FieldRejectedError: If the store rejects the avatar key
            StoreUnavailableError: If the store cannot be reached
        """
        values = invitation_to_dict(invitation)

        async with store_errors("invitations.save"):
            try:
                async with self.session.begin_nested():
                    existing = await self.session.execute(
                        select(invitations_table.c.id).where(
                            invitations_table.c.id == invitation.id
                        )
                    )
                    if existing.first():
                        stmt = (
                            update(invitations_table)
                            .where(invitations_table.c.id == invitation.id)
                            .values(**values)
                        )
                    else:
                        stmt = insert(invitations_table).values(**values)
                    await self.session.execute(stmt)
            except IntegrityError:
                raise DuplicateInvitationError(invitation.recipient_email.root)
            except DataError as e:
                if invitation.inviter_avatar:
                    raise FieldRejectedError("inviter_avatar", str(e.orig))
                raise

        return invitation
