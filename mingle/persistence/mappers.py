"""Mappers for converting between database rows and domain models.

Since domain models are immutable pydantic models, mapping is manual
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from mingle.domain.model import Connection, Invitation, UserProfile
from mingle.domain.value import (
    ConnectionId,
    DeliveryMethod,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        inviter_id=UserId(row["inviter_id"]),
        inviter_name=row["inviter_name"],
        inviter_avatar=row.get("inviter_avatar"),
        recipient_email=EmailAddress(row["recipient_email"]),
        recipient_name=row.get("recipient_name"),
        message=row.get("message"),
        status=InvitationStatus(row["status"]),
        sent_at=row["sent_at"],
        message_id=row.get("message_id"),
        delivery_method=DeliveryMethod(row["delivery_method"])
        if row.get("delivery_method")
        else None,
        friend_id=UserId(row["friend_id"]) if row.get("friend_id") else None,
        responded_at=row.get("responded_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    The sync state is local bookkeeping and is not stored.
    """
    return {
        "id": invitation.id,
        "inviter_id": invitation.inviter_id,
        "inviter_name": invitation.inviter_name,
        "inviter_avatar": invitation.inviter_avatar,
        "recipient_email": invitation.recipient_email.root,
        "recipient_name": invitation.recipient_name,
        "message": invitation.message,
        "status": invitation.status.value,
        "sent_at": invitation.sent_at,
        "message_id": invitation.message_id,
        "delivery_method": invitation.delivery_method.value
        if invitation.delivery_method
        else None,
        "friend_id": invitation.friend_id,
        "responded_at": invitation.responded_at,
    }


def row_to_connection(row: Dict[str, Any]) -> Connection:
    return Connection(
        id=ConnectionId(_uuid(row["id"])),
        inviter_id=UserId(row["inviter_id"]),
        friend_id=UserId(row["friend_id"]),
        created_at=row["created_at"],
    )


def connection_to_dict(connection: Connection) -> Dict[str, Any]:
    return connection.model_dump()


def row_to_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert database row to UserProfile domain model."""
    return UserProfile(
        user_id=UserId(row["user_id"]),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        username=row.get("username"),
        email=row.get("email"),
        profile_photo_key=row.get("profile_photo_key"),
        profile_photo_url=row.get("profile_photo_url"),
    )


def profile_to_dict(profile: UserProfile) -> Dict[str, Any]:
    data = profile.model_dump()
    if data.get("email"):
        data["email"] = data["email"].strip().lower()
    return data
