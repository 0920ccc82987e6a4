"""Connection domain service."""

import asyncio
from uuid import uuid4

import logfire

from mingle.domain.error import DomainError, PersistenceError, ValidationError
from mingle.domain.model.connection import Connection, ConnectionPair
from mingle.domain.model.invitation import Invitation
from mingle.domain.model.profile import UserProfile
from mingle.domain.repository import ConnectionRepository
from mingle.domain.value import (
    ConnectionId,
    EmailAddress,
    InvitationStatus,
    UserId,
)

from .base import Service
from .invitation_service import InvitationService
from .notification_service import NotificationService
from .profile_service import ProfileService


class ConnectionService(Service):
    """Domain service for friend connections.

    Turns accepted invitations and friend requests into pairs of directed
    edges, and reconciles invitations when their recipient registers.
    """

    def __init__(
        self,
        connection_repository: ConnectionRepository,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize connection service.

        Args:
            connection_repository: Connection edge repository
            invitation_service: Invitation record service
            profile_service: Profile and avatar lookups
            notification_service: Notification feeds
        """
        self.connection_repository = connection_repository
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.notification_service = notification_service

    async def _ensure_edge(self, source: UserId, target: UserId) -> Connection | None:
        try:
            existing = await self.connection_repository.find_edge(source, target)
            if existing is not None:
                return existing
            return await self.connection_repository.save(
                Connection(
                    id=ConnectionId(uuid4()),
                    inviter_id=source,
                    friend_id=target,
                )
            )
        except PersistenceError as e:
            logfire.error(
                "Connection edge not created",
                inviter_id=str(source),
                friend_id=str(target),
                error=str(e),
            )
            return None

    async def create_bidirectional(self, user_a: UserId, user_b: UserId) -> ConnectionPair:
        """Create both directed edges between two users.

        Each edge is written independently; an existing edge is reused and a
        failed one is logged and left missing.

        Args:
            user_a: Inviter
            user_b: Friend

        Returns:
            The pair of edges

        Raises:
            ValidationError: If both ids are the same user
        """
        if user_a == user_b:
            raise ValidationError("Users cannot connect with themselves")

        with logfire.span(
            "connection_service.create_bidirectional",
            inviter_id=str(user_a),
            friend_id=str(user_b),
        ):
            forward = await self._ensure_edge(user_a, user_b)
            backward = await self._ensure_edge(user_b, user_a)
            pair = ConnectionPair(forward=forward, backward=backward)

            if pair.complete:
                logfire.info("Connection created", inviter_id=str(user_a), friend_id=str(user_b))
            else:
                logfire.warn(
                    "Connection partially created",
                    forward=forward is not None,
                    backward=backward is not None,
                )
            return pair

    async def are_connected(self, user_a: UserId, user_b: UserId) -> bool:
        """Whether ``user_a`` already has ``user_b`` as a friend."""
        return await self.connection_repository.find_edge(user_a, user_b) is not None

    async def handle_registration(
        self, new_user_email: EmailAddress, new_user_id: UserId
    ) -> list[Invitation]:
        """Reconcile invitations addressed to a newly registered user.

        For each pending invitation to the email: mark it registered, connect
        the two users and send the new user one friend request naming the
        inviter. Inviters are processed independently. Pending friend
        requests for the email are delivered afterwards.

        Args:
            new_user_email: The new user's email
            new_user_id: The new user's id

        Returns:
            Invitations moved to registered
        """
        with logfire.span(
            "connection_service.handle_registration",
            email=new_user_email.root,
            user_id=str(new_user_id),
        ):
            try:
                pending = await self.invitation_service.find_by_recipient_email(
                    new_user_email, InvitationStatus.PENDING
                )
            except PersistenceError as e:
                logfire.error("Pending invitations unavailable", error=str(e))
                pending = []

            registered = []
            avatars: dict[UserId, str | None] = {}
            for invitation in pending:
                if invitation.inviter_id == new_user_id:
                    continue
                try:
                    updated = await self.invitation_service.update_status(
                        invitation.id, InvitationStatus.REGISTERED, friend_id=new_user_id
                    )
                except DomainError as e:
                    logfire.error(
                        "Invitation not moved to registered",
                        invitation_id=str(invitation.id),
                        error=str(e),
                    )
                    continue
                registered.append(updated)

                try:
                    await self.create_bidirectional(invitation.inviter_id, new_user_id)

                    name = await self.profile_service.display_name(
                        invitation.inviter_id, fallback=invitation.inviter_name
                    )
                    key = invitation.inviter_avatar or await self.profile_service.avatar_key(
                        invitation.inviter_id
                    )
                    avatar = await self.profile_service.avatar_url(key)
                    avatars[invitation.inviter_id] = avatar

                    self.notification_service.create_friend_request(
                        recipient_id=new_user_id,
                        inviter_id=invitation.inviter_id,
                        inviter_name=name,
                        avatar=avatar,
                    )
                except DomainError as e:
                    logfire.error(
                        "Registration reconciliation failed for inviter",
                        invitation_id=str(invitation.id),
                        inviter_id=str(invitation.inviter_id),
                        error=str(e),
                    )

            for marker in self.notification_service.pending_friend_requests(new_user_email):
                if marker.inviter_id not in avatars:
                    avatars[marker.inviter_id] = await self.profile_service.avatar_url(
                        marker.inviter_avatar
                    )
            self.notification_service.deliver_pending_friend_requests(
                new_user_email, new_user_id, avatars=avatars
            )

            logfire.info(
                "Registration reconciled",
                user_id=str(new_user_id),
                invitations=len(registered),
            )
            return registered

    async def withdraw_friend_request(self, invitation: Invitation) -> None:
        """Take back the friend request carried by a closed invitation.

        Skipped while another pending invitation from the same inviter still
        addresses the email.
        """
        try:
            others = await self.invitation_service.find_by_recipient_email(
                invitation.recipient_email, InvitationStatus.PENDING
            )
        except PersistenceError as e:
            logfire.warn("Open invitations unavailable", error=str(e))
            others = []
        if any(
            other.id != invitation.id and other.inviter_id == invitation.inviter_id
            for other in others
        ):
            return

        recipient_id = invitation.friend_id
        if recipient_id is None:
            recipient_id = await self.profile_service.find_user_id_by_email(
                invitation.recipient_email
            )
        self.notification_service.withdraw_friend_request(
            invitation.recipient_email, invitation.inviter_id, recipient_id
        )

    async def list_connections(
        self, user_id: UserId
    ) -> list[tuple[Connection, UserProfile | None]]:
        """List a user's connections with the friend's profile.

        Profiles are fetched together; a failed lookup yields None for that
        friend rather than failing the list.
        """
        with logfire.span("connection_service.list_connections", user_id=str(user_id)):
            connections = await self.connection_repository.find_by_inviter(user_id)
            profiles = await asyncio.gather(
                *(self.profile_service.get(c.friend_id) for c in connections),
                return_exceptions=True,
            )

            results = []
            for connection, profile in zip(connections, profiles):
                if isinstance(profile, BaseException):
                    logfire.warn(
                        "Friend profile unavailable",
                        friend_id=str(connection.friend_id),
                        error=str(profile),
                    )
                    profile = None
                results.append((connection, profile))
            return results
