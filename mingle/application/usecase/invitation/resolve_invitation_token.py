"""Resolve invitation token use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.domain.error import NotFoundError
from mingle.domain.service import ProfileService, TokenCodec


class ResolveInvitationTokenRequest(BaseModel):
    token: str


class ResolveInvitationTokenResponse(BaseModel):
    """Context shown on the sign-up page for an emailed link."""

    inviter_name: str
    inviter_avatar_url: str | None
    recipient_name: str
    recipient_email: str
    expires_at: datetime


class ResolveInvitationTokenUseCase(BaseUseCase):
    """Use case for looking up the context behind an emailed link."""

    def __init__(self, token_codec: TokenCodec, profile_service: ProfileService) -> None:
        self.token_codec = token_codec
        self.profile_service = profile_service

    async def execute(
        self, request: ResolveInvitationTokenRequest
    ) -> ResolveInvitationTokenResponse:
        """Execute resolve token use case.

        Raises:
            NotFoundError: If the token is unknown or expired
        """
        with logfire.span("resolve_invitation_token", token=request.token[:8] + "..."):
            payload = self.token_codec.resolve(request.token)
            if payload is None:
                raise NotFoundError("Invitation token", request.token[:8] + "...")

            return ResolveInvitationTokenResponse(
                inviter_name=payload.inviter_name,
                inviter_avatar_url=await self.profile_service.avatar_url(
                    payload.inviter_avatar
                ),
                recipient_name=payload.recipient_name,
                recipient_email=payload.recipient_email.root,
                expires_at=payload.expires_at,
            )
