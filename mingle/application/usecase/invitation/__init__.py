"""Invitation use cases."""

from mingle.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from mingle.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationUseCase,
)
from mingle.application.usecase.invitation.get_invitations import (
    GetInvitationsRequest,
    GetInvitationsResponse,
    GetInvitationsUseCase,
)
from mingle.application.usecase.invitation.handle_registration import (
    HandleRegistrationRequest,
    HandleRegistrationResponse,
    HandleRegistrationUseCase,
)
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.application.usecase.invitation.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from mingle.application.usecase.invitation.resolve_invitation_token import (
    ResolveInvitationTokenRequest,
    ResolveInvitationTokenResponse,
    ResolveInvitationTokenUseCase,
)
from mingle.application.usecase.invitation.respond_to_invitation import (
    RespondToInvitationRequest,
    RespondToInvitationResponse,
    RespondToInvitationUseCase,
)
from mingle.application.usecase.invitation.send_invitation import (
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)
from mingle.application.usecase.invitation.sync_invitations import (
    SyncInvitationsRequest,
    SyncInvitationsResponse,
    SyncInvitationsUseCase,
)

__all__ = [
    "CancelInvitationRequest",
    "CancelInvitationResponse",
    "CancelInvitationUseCase",
    "GetInvitationRequest",
    "GetInvitationUseCase",
    "GetInvitationsRequest",
    "GetInvitationsResponse",
    "GetInvitationsUseCase",
    "HandleRegistrationRequest",
    "HandleRegistrationResponse",
    "HandleRegistrationUseCase",
    "InvitationItem",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
    "ResolveInvitationTokenRequest",
    "ResolveInvitationTokenResponse",
    "ResolveInvitationTokenUseCase",
    "RespondToInvitationRequest",
    "RespondToInvitationResponse",
    "RespondToInvitationUseCase",
    "SendInvitationRequest",
    "SendInvitationResponse",
    "SendInvitationUseCase",
    "SyncInvitationsRequest",
    "SyncInvitationsResponse",
    "SyncInvitationsUseCase",
]
