"""Invitation domain service."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from mingle.config import InvitationSettings
from mingle.domain.error import (
    CacheError,
    FieldRejectedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from mingle.domain.model.invitation import Invitation, utcnow
from mingle.domain.repository import InvitationMirror, InvitationRepository
from mingle.domain.value import (
    DeliveryMethod,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    SyncState,
    UserId,
)

from .base import Service


def parse_email(value: EmailAddress | str | None) -> EmailAddress:
    """Normalize a recipient email.

    Raises:
        ValidationError: If the email is missing or malformed
    """
    if isinstance(value, EmailAddress):
        return value
    if not value or not value.strip():
        raise ValidationError("Recipient email is required")
    try:
        return EmailAddress(value)
    except ValueError:
        raise ValidationError(f"Invalid email address: {value.strip()}")


class InvitationService(Service):
    """Domain service for the invitation record.

    The record store is the source of truth. Every record is also mirrored
    into the local cache so the inviter's view survives store outages.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        invitation_mirror: InvitationMirror,
        settings: InvitationSettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Durable record store
            invitation_mirror: Local cache of each inviter's invitations
            settings: Invitation settings
        """
        self.invitation_repository = invitation_repository
        self.invitation_mirror = invitation_mirror
        self.settings = settings

    async def create(
        self,
        inviter_id: UserId | None,
        recipient_email: EmailAddress | str | None,
        inviter_name: str | None,
        inviter_avatar: str | None = None,
        recipient_name: str | None = None,
        message: str | None = None,
        message_id: str | None = None,
        delivery_method: DeliveryMethod | None = None,
    ) -> Invitation:
        """Create a pending invitation.

        A field rejected by the store is dropped and the save retried once.
        When the store is unreachable, a local record marked ``pending_sync``
        is returned instead.

        Args:
            inviter_id: Inviter's user id
            recipient_email: Recipient email, normalized here
            inviter_name: Inviter display name (placeholder when missing)
            inviter_avatar: Inviter's avatar storage key
            recipient_name: Recipient display name
            message: Personal message
            message_id: Provider message id of the delivered email
            delivery_method: How the email left the system

        Returns:
            The created invitation

        Raises:
            ValidationError: If the inviter or email is missing, or the email is malformed
        """
        if not inviter_id:
            raise ValidationError("Inviter id is required")
        email = parse_email(recipient_email)

        invitation = Invitation(
            id=InvitationId(uuid4()),
            inviter_id=inviter_id,
            inviter_name=(inviter_name or "").strip() or self.settings.default_inviter_name,
            inviter_avatar=inviter_avatar,
            recipient_email=email,
            recipient_name=recipient_name,
            message=message,
            status=InvitationStatus.PENDING,
            sent_at=utcnow(),
            message_id=message_id,
            delivery_method=delivery_method,
        )

        with logfire.span(
            "invitation_service.create",
            inviter_id=str(inviter_id),
            recipient_email=email.root,
        ):
            saved = await self._persist_new(invitation)
            self.mirror_add(saved)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                sync_state=saved.sync_state.value,
            )
            return saved

    async def _persist_new(self, invitation: Invitation) -> Invitation:
        try:
            try:
                return await self.invitation_repository.save(invitation)
            except FieldRejectedError as e:
                logfire.warn(
                    "Record store rejected field, retrying without it",
                    field=e.field,
                    error=str(e),
                )
                narrowed = invitation.model_copy(update={"inviter_avatar": None})
                return await self.invitation_repository.save(narrowed)
        except PersistenceError as e:
            logfire.error(
                "Record store unavailable, keeping invitation locally",
                invitation_id=str(invitation.id),
                error=str(e),
            )
            return invitation.model_copy(update={"sync_state": SyncState.PENDING_SYNC})

    async def get(self, invitation_id: InvitationId) -> Invitation:
        """Get an invitation by id, consulting the mirror as a fallback.

        Raises:
            NotFoundError: If neither the store nor the mirror has it
        """
        with logfire.span("invitation_service.get", invitation_id=str(invitation_id)):
            invitation = None
            try:
                invitation = await self.invitation_repository.find_by_id(invitation_id)
            except PersistenceError as e:
                logfire.warn("Record store lookup failed", error=str(e))

            if invitation is None:
                invitation = self._mirror_find(invitation_id)

            if invitation is None:
                logfire.warn("Invitation not found", invitation_id=str(invitation_id))
                raise NotFoundError("Invitation", str(invitation_id))
            return invitation

    def _mirror_find(self, invitation_id: InvitationId) -> Invitation | None:
        try:
            for inviter_id in self.invitation_mirror.inviters():
                for invitation in self.invitation_mirror.get_all(inviter_id):
                    if invitation.id == invitation_id:
                        return invitation
        except CacheError as e:
            logfire.warn("Mirror unreadable", error=str(e))
        return None

    async def find_by_recipient_email(
        self, email: EmailAddress, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        return await self.invitation_repository.find_by_recipient_email(email, status)

    async def has_pending(
        self, inviter_id: UserId, recipient_email: EmailAddress | str
    ) -> bool:
        """Whether a pending invitation already exists for the pair."""
        email = parse_email(recipient_email)
        for invitation in self.mirror_get_all(inviter_id):
            if invitation.is_pending and invitation.recipient_email == email:
                return True
        try:
            return await self.invitation_repository.find_pending(inviter_id, email) is not None
        except PersistenceError as e:
            logfire.warn("Duplicate check skipped record store", error=str(e))
            return False

    async def update_status(
        self,
        invitation_id: InvitationId,
        status: InvitationStatus,
        friend_id: UserId | None = None,
    ) -> Invitation:
        """Move an invitation to ``status``.

        The record store write is best-effort; the mirror always follows.
        Cancelled invitations leave the mirror.

        Raises:
            NotFoundError: If the invitation does not exist
            InvalidTransitionError: If the move is not allowed
        """
        with logfire.span(
            "invitation_service.update_status",
            invitation_id=str(invitation_id),
            status=status.value,
        ):
            current = await self.get(invitation_id)
            updated = current.transition(status, friend_id=friend_id)
            updated = await self._persist_update(updated)

            if status == InvitationStatus.CANCELLED:
                self.mirror_remove(updated.inviter_id, updated.id)
            else:
                self.mirror_add(updated)

            logfire.info(
                "Invitation status updated",
                invitation_id=str(invitation_id),
                old_status=current.status.value,
                new_status=status.value,
            )
            return updated

    async def record_resend(
        self,
        invitation_id: InvitationId,
        sent_at: datetime,
        message_id: str | None,
        delivery_method: DeliveryMethod | None = None,
    ) -> Invitation:
        """Refresh delivery details after a resend. Status is unchanged."""
        with logfire.span("invitation_service.record_resend", invitation_id=str(invitation_id)):
            current = await self.get(invitation_id)
            updated = current.model_copy(
                update={
                    "sent_at": sent_at,
                    "message_id": message_id,
                    "delivery_method": delivery_method or current.delivery_method,
                }
            )
            updated = await self._persist_update(updated)
            self.mirror_add(updated)
            return updated

    async def _persist_update(self, invitation: Invitation) -> Invitation:
        try:
            saved = await self.invitation_repository.save(invitation)
        except PersistenceError as e:
            logfire.error(
                "Invitation update not persisted",
                invitation_id=str(invitation.id),
                error=str(e),
            )
            return invitation
        if saved.sync_state != SyncState.SYNCED:
            saved = saved.model_copy(update={"sync_state": SyncState.SYNCED})
        return saved

    async def refresh_mirror(self, inviter_id: UserId) -> list[Invitation]:
        """Rebuild the inviter's mirror from the record store.

        The store wins for every id it knows. Local ``pending_sync`` records
        are kept. Cancelled invitations are dropped.

        Returns:
            The mirrored invitations, newest first
        """
        with logfire.span("invitation_service.refresh_mirror", inviter_id=str(inviter_id)):
            durable = await self.invitation_repository.find_by_inviter(inviter_id)
            known = {i.id for i in durable}
            local_only = [
                i
                for i in self.mirror_get_all(inviter_id)
                if i.sync_state == SyncState.PENDING_SYNC and i.id not in known
            ]
            merged = [
                i for i in durable if i.status != InvitationStatus.CANCELLED
            ] + local_only
            merged.sort(key=lambda i: i.sent_at, reverse=True)
            self.mirror_save_all(inviter_id, merged)
            return merged

    async def sync_pending(self, inviter_id: UserId) -> int:
        """Write locally fabricated invitations to the record store.

        A fabricated record whose pair already has a pending invitation in
        the store is replaced by the stored one.

        Returns:
            Number of records reconciled
        """
        with logfire.span("invitation_service.sync_pending", inviter_id=str(inviter_id)):
            local = [
                i
                for i in self.mirror_get_all(inviter_id)
                if i.sync_state == SyncState.PENDING_SYNC
            ]
            synced = 0
            for invitation in local:
                try:
                    existing = await self.invitation_repository.find_pending(
                        inviter_id, invitation.recipient_email
                    )
                    if existing is not None and existing.id != invitation.id:
                        self.mirror_remove(inviter_id, invitation.id)
                        self.mirror_add(existing)
                    else:
                        saved = await self._persist_new(
                            invitation.model_copy(update={"sync_state": SyncState.SYNCED})
                        )
                        if saved.sync_state == SyncState.PENDING_SYNC:
                            break
                        self.mirror_add(saved)
                    synced += 1
                except PersistenceError as e:
                    logfire.warn(
                        "Invitation sync stopped",
                        invitation_id=str(invitation.id),
                        error=str(e),
                    )
                    break

            if local:
                logfire.info(
                    "Pending invitations synced",
                    inviter_id=str(inviter_id),
                    synced=synced,
                    remaining=len(local) - synced,
                )
            return synced

    async def expire_stale(self, older_than: timedelta | None = None) -> list[Invitation]:
        """Expire pending invitations last sent before the cutoff.

        Args:
            older_than: Age threshold (``stale_after_days`` by default)

        Returns:
            The expired invitations
        """
        older_than = older_than or timedelta(days=self.settings.stale_after_days)
        cutoff = utcnow() - older_than

        with logfire.span("invitation_service.expire_stale", cutoff=cutoff.isoformat()):
            stale = await self.invitation_repository.find_pending_sent_before(cutoff)
            expired = []
            for invitation in stale:
                updated = invitation.transition(InvitationStatus.EXPIRED)
                saved = await self.invitation_repository.save(updated)
                self.mirror_add(saved)
                expired.append(saved)
            logfire.info("Stale invitations expired", count=len(expired))
            return expired

    def mirrored_inviters(self) -> list[UserId]:
        try:
            return self.invitation_mirror.inviters()
        except CacheError as e:
            logfire.warn("Mirror unreadable", error=str(e))
            return []

    def mirror_get_all(self, inviter_id: UserId) -> list[Invitation]:
        try:
            return self.invitation_mirror.get_all(inviter_id)
        except CacheError as e:
            logfire.warn("Mirror unreadable", inviter_id=str(inviter_id), error=str(e))
            return []

    def mirror_save_all(self, inviter_id: UserId, invitations: list[Invitation]) -> None:
        try:
            self.invitation_mirror.save_all(inviter_id, invitations)
        except CacheError as e:
            logfire.warn("Mirror not written", inviter_id=str(inviter_id), error=str(e))

    def mirror_add(self, invitation: Invitation) -> None:
        try:
            self.invitation_mirror.add(invitation)
        except CacheError as e:
            logfire.warn("Mirror not written", invitation_id=str(invitation.id), error=str(e))

    def mirror_remove(self, inviter_id: UserId, invitation_id: InvitationId) -> bool:
        try:
            return self.invitation_mirror.remove(inviter_id, invitation_id)
        except CacheError as e:
            logfire.warn("Mirror not written", invitation_id=str(invitation_id), error=str(e))
            return False

    async def list(
        self, inviter_id: UserId, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        """List an inviter's invitations, newest first.

        Falls back to the mirror when the record store fails.
        """
        with logfire.span("invitation_service.list", inviter_id=str(inviter_id)):
            try:
                return await self.invitation_repository.find_by_inviter(inviter_id, status)
            except PersistenceError as e:
                logfire.warn("Listing from mirror", inviter_id=str(inviter_id), error=str(e))
                mirrored = self.mirror_get_all(inviter_id)
                if status is not None:
                    mirrored = [i for i in mirrored if i.status == status]
                return sorted(mirrored, key=lambda i: i.sent_at, reverse=True)
