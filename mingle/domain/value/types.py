"""Domain value objects for Mingle.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from mingle.domain.value.common import RootValueObject, ValueObject

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvitationStatus(str, Enum):
    """Lifecycle status of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    # Recipient now has an account; may still accept or decline
    REGISTERED = "registered"

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        """Whether moving from this status to ``target`` is allowed."""
        return target in _TRANSITIONS[self]

    @property
    def is_open(self) -> bool:
        """Whether the recipient can still act on the invitation."""
        return self in (InvitationStatus.PENDING, InvitationStatus.REGISTERED)


_TRANSITIONS: dict[InvitationStatus, frozenset[InvitationStatus]] = {
    InvitationStatus.PENDING: frozenset(
        {
            InvitationStatus.ACCEPTED,
            InvitationStatus.DECLINED,
            InvitationStatus.CANCELLED,
            InvitationStatus.EXPIRED,
            InvitationStatus.REGISTERED,
        }
    ),
    InvitationStatus.REGISTERED: frozenset(
        {InvitationStatus.ACCEPTED, InvitationStatus.DECLINED}
    ),
    InvitationStatus.ACCEPTED: frozenset(),
    InvitationStatus.DECLINED: frozenset(),
    InvitationStatus.CANCELLED: frozenset(),
    InvitationStatus.EXPIRED: frozenset(),
}


class SyncState(str, Enum):
    """Whether an invitation is known to exist in the durable store."""

    SYNCED = "synced"
    # Fabricated locally while the record store was unreachable
    PENDING_SYNC = "pending_sync"


class DeliveryMethod(str, Enum):
    """How an invitation email left the system."""

    PROVIDER = "provider"
    PROVIDER_RAW = "provider_raw"
    MAIL_CLIENT = "mail_client"


class DeliveryErrorKind(str, Enum):
    """Delivery failure taxonomy surfaced to callers."""

    SENDER_NOT_VERIFIED = "sender_not_verified"
    RECIPIENT_NOT_VERIFIED = "recipient_not_verified"
    CONFIGURATION_REJECTED = "configuration_rejected"
    PROVIDER_ERROR = "provider_error"
    MAIL_CLIENT_FALLBACK_USED = "mail_client_fallback_used"

    @property
    def user_message(self) -> str:
        """Message suitable for showing to the sender."""
        return _DELIVERY_MESSAGES[self]


_DELIVERY_MESSAGES = {
    DeliveryErrorKind.SENDER_NOT_VERIFIED: (
        "Our sending address is not verified with the email provider yet."
    ),
    DeliveryErrorKind.RECIPIENT_NOT_VERIFIED: (
        "The email provider is in sandbox mode and this recipient is not verified."
    ),
    DeliveryErrorKind.CONFIGURATION_REJECTED: (
        "The email provider rejected our delivery configuration."
    ),
    DeliveryErrorKind.PROVIDER_ERROR: "The invitation email could not be sent.",
    DeliveryErrorKind.MAIL_CLIENT_FALLBACK_USED: (
        "Your mail app was opened with the invitation. Press send to deliver it."
    ),
}


class AvatarVariant(str, Enum):
    """Colour variant for generated text avatars."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class EmailAddress(RootValueObject[str]):
    """Recipient email address, always trimmed and lower-cased.

    Examples: ' Foo@Example.COM ' is stored as 'foo@example.com'
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_and_validate(cls, v: object) -> str:
        """Normalize then validate the address format."""
        if not isinstance(v, str):
            raise ValueError("Email address must be a string")
        normalized = v.strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise ValueError(f"Invalid email format: {v!r}")
        return normalized

    @property
    def local_part(self) -> str:
        """Portion before the @, used as a fallback display name."""
        return self.root.split("@", 1)[0]


class InvitationToken(RootValueObject[str]):
    """Unguessable token carried in emailed invitation links."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is URL-safe and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        if not re.match(r"^[A-Za-z0-9_\-]+$", v):
            raise ValueError("Token must be URL-safe")
        return v


class TextAvatar(ValueObject):
    """Generated avatar used when no profile photo is available."""

    text: str
    variant: AvatarVariant = AvatarVariant.PRIMARY

    @classmethod
    def for_name(cls, name: str) -> "TextAvatar":
        """Build a text avatar from the first letter of a display name."""
        initial = name.strip()[:1].upper() or "?"
        return cls(text=initial, variant=AvatarVariant.PRIMARY)
