"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel

from mingle.application.usecase.invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    GetInvitationRequest,
    GetInvitationsRequest,
    GetInvitationsResponse,
    GetInvitationsUseCase,
    GetInvitationUseCase,
    InvitationItem,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    ResolveInvitationTokenRequest,
    ResolveInvitationTokenResponse,
    ResolveInvitationTokenUseCase,
    RespondToInvitationRequest,
    RespondToInvitationResponse,
    RespondToInvitationUseCase,
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)
from mingle.domain.error import DomainError
from mingle.domain.service import AuthService
from mingle.domain.value import InvitationStatus
from mingle.interface.api.auth import authenticate
from mingle.interface.error import delivery_failed, http_error

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class SendInvitationAPIRequest(BaseModel):
    """API request for inviting a friend by email."""

    recipient_email: str
    recipient_name: str | None = None
    message: str | None = None
    allow_mail_client_fallback: bool | None = None


class ResendInvitationAPIRequest(BaseModel):
    allow_mail_client_fallback: bool = False


@router.post(
    "", response_model=SendInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def send_invitation(
    request: SendInvitationAPIRequest,
    send_invitation_use_case: FromDishka[SendInvitationUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SendInvitationResponse:
    """Invite a friend by email.

    Raises:
        HTTPException: 400 on a bad email, 409 on a duplicate, 502 when the
            email could not be delivered
    """
    user = authenticate(auth_service, auth_token, authorization)

    try:
        response = await send_invitation_use_case.execute(
            SendInvitationRequest(
                inviter_id=user.id,
                inviter_username=user.username,
                inviter_email=user.email,
                recipient_email=request.recipient_email,
                recipient_name=request.recipient_name,
                message=request.message,
                allow_mail_client_fallback=request.allow_mail_client_fallback,
            )
        )
    except DomainError as e:
        raise http_error(e)

    if not response.success:
        raise delivery_failed(
            {
                "error": response.error,
                "error_kind": response.error_kind.value if response.error_kind else None,
                "message": response.user_message,
            }
        )
    return response


@router.get("", response_model=GetInvitationsResponse)
async def get_invitations(
    get_invitations_use_case: FromDishka[GetInvitationsUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
) -> GetInvitationsResponse:
    """List invitations sent by the current user, newest first."""
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await get_invitations_use_case.execute(
            GetInvitationsRequest(inviter_id=user.id, status=status_filter)
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/tokens/{token}", response_model=ResolveInvitationTokenResponse)
async def resolve_invitation_token(
    token: str,
    resolve_token_use_case: FromDishka[ResolveInvitationTokenUseCase],
) -> ResolveInvitationTokenResponse:
    """Resolve an emailed invitation link. No session required."""
    try:
        return await resolve_token_use_case.execute(
            ResolveInvitationTokenRequest(token=token)
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/{invitation_id}", response_model=InvitationItem)
async def get_invitation(
    invitation_id: UUID,
    get_invitation_use_case: FromDishka[GetInvitationUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> InvitationItem:
    """Get one invitation, for its inviter or recipient."""
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await get_invitation_use_case.execute(
            GetInvitationRequest(
                invitation_id=str(invitation_id),
                user_id=user.id,
                user_email=user.email,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{invitation_id}/resend", response_model=ResendInvitationResponse)
async def resend_invitation(
    invitation_id: UUID,
    resend_invitation_use_case: FromDishka[ResendInvitationUseCase],
    auth_service: FromDishka[AuthService],
    request: ResendInvitationAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ResendInvitationResponse:
    """Resend a pending invitation email."""
    user = authenticate(auth_service, auth_token, authorization)
    request = request or ResendInvitationAPIRequest()
    try:
        response = await resend_invitation_use_case.execute(
            ResendInvitationRequest(
                invitation_id=str(invitation_id),
                user_id=user.id,
                allow_mail_client_fallback=request.allow_mail_client_fallback,
            )
        )
    except DomainError as e:
        raise http_error(e)

    if not response.success:
        raise delivery_failed(
            {
                "error": response.error,
                "error_kind": response.error_kind.value if response.error_kind else None,
                "message": response.user_message,
            }
        )
    return response


@router.post("/{invitation_id}/cancel", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: UUID,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CancelInvitationResponse:
    """Cancel a pending invitation."""
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await cancel_invitation_use_case.execute(
            CancelInvitationRequest(invitation_id=str(invitation_id), user_id=user.id)
        )
    except DomainError as e:
        raise http_error(e)


async def _respond(
    action: str,
    invitation_id: UUID,
    use_case: RespondToInvitationUseCase,
    auth_service: AuthService,
    auth_token: str | None,
    authorization: str | None,
) -> RespondToInvitationResponse:
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await use_case.execute(
            RespondToInvitationRequest(
                invitation_id=str(invitation_id),
                user_id=user.id,
                user_email=user.email,
                action=action,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{invitation_id}/accept", response_model=RespondToInvitationResponse)
async def accept_invitation(
    invitation_id: UUID,
    respond_use_case: FromDishka[RespondToInvitationUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondToInvitationResponse:
    """Accept an invitation and connect with the inviter."""
    return await _respond(
        "accept", invitation_id, respond_use_case, auth_service, auth_token, authorization
    )


@router.post("/{invitation_id}/decline", response_model=RespondToInvitationResponse)
async def decline_invitation(
    invitation_id: UUID,
    respond_use_case: FromDishka[RespondToInvitationUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondToInvitationResponse:
    """Decline an invitation."""
    return await _respond(
        "decline", invitation_id, respond_use_case, auth_service, auth_token, authorization
    )
