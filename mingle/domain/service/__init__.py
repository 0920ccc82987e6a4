"""Domain services."""

from .auth_service import AuthService
from .base import Service
from .connection_service import ConnectionService
from .invitation_service import InvitationService, parse_email
from .jwt_service import JWTService
from .mail_dispatcher import DeliveryResult, MailDispatcher, MailSender, OutgoingEmail
from .notification_service import NotificationService
from .profile_service import ObjectStorage, ProfileService
from .token_codec import TokenCodec

__all__ = [
    "AuthService",
    "ConnectionService",
    "DeliveryResult",
    "InvitationService",
    "JWTService",
    "MailDispatcher",
    "MailSender",
    "NotificationService",
    "ObjectStorage",
    "OutgoingEmail",
    "ProfileService",
    "Service",
    "TokenCodec",
    "parse_email",
]
