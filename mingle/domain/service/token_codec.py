"""Invitation token codec."""

import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Callable

import logfire

from mingle.config import InvitationSettings
from mingle.domain.error import CacheError
from mingle.domain.model.token import TokenPayload
from mingle.domain.repository import TokenRepository
from mingle.domain.value import EmailAddress, InvitationToken

from .base import Service


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec(Service):
    """Mints and resolves self-expiring invitation tokens.

    Payloads live in the local cache only. Nothing here raises: cache
    failures are logged and reads degrade to "absent".
    """

    def __init__(
        self,
        token_repository: TokenRepository,
        settings: InvitationSettings,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize token codec.

        Args:
            token_repository: Cache-backed payload storage
            settings: Invitation settings (token lifetime)
            now: Clock, overridable in tests
        """
        self.token_repository = token_repository
        self.ttl = timedelta(days=settings.token_ttl_days)
        self.now = now

    @staticmethod
    def _generate() -> InvitationToken:
        # Nanosecond timestamp plus 128 random bits
        return InvitationToken(f"inv{time.time_ns():x}_{secrets.token_urlsafe(16)}")

    def mint(
        self,
        inviter_name: str,
        recipient_name: str,
        recipient_email: EmailAddress,
        inviter_avatar: str | None = None,
    ) -> InvitationToken:
        """Mint a token and stash its payload.

        Args:
            inviter_name: Display name of the inviter
            recipient_name: Display name of the recipient
            recipient_email: Normalized recipient email
            inviter_avatar: Optional storage key of the inviter's photo

        Returns:
            The new token
        """
        token = self._generate()
        created_at = self.now()
        payload = TokenPayload(
            token=token,
            inviter_name=inviter_name,
            recipient_name=recipient_name,
            recipient_email=recipient_email,
            inviter_avatar=inviter_avatar,
            created_at=created_at,
            expires_at=created_at + self.ttl,
        )

        try:
            self.token_repository.put(payload)
        except CacheError as e:
            # Links still work for sign-up; only the prefilled context is lost
            logfire.warn("Token payload not stored", error=str(e))

        logfire.info(
            "Invitation token minted",
            token=token.root[:8] + "...",
            expires_at=payload.expires_at.isoformat(),
        )
        return token

    def resolve(self, token: InvitationToken | str) -> TokenPayload | None:
        """Look up a token's payload, purging it when expired.

        Args:
            token: Token from an emailed link

        Returns:
            The payload, or None when unknown or expired
        """
        if isinstance(token, str):
            try:
                token = InvitationToken(token)
            except ValueError:
                return None

        with logfire.span("token_codec.resolve", token=token.root[:8] + "..."):
            try:
                payload = self.token_repository.get(token)
            except CacheError as e:
                logfire.warn("Token payload unreadable", error=str(e))
                return None

            if payload is None:
                return None

            if payload.is_expired(self.now()):
                logfire.info("Invitation token expired", token=token.root[:8] + "...")
                try:
                    self.token_repository.delete(token)
                except CacheError as e:
                    logfire.warn("Expired token not purged", error=str(e))
                return None

            return payload
