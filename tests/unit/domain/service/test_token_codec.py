"""Unit tests for TokenCodec."""

from datetime import datetime, timedelta, timezone

import pytest

from mingle.config import InvitationSettings
from mingle.domain.error import CacheError
from mingle.domain.service import TokenCodec
from mingle.domain.value import EmailAddress, InvitationToken
from mingle.persistence.cache import CachedTokenRepository, InMemoryKeyValueStore
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FailingTokenRepository(CachedTokenRepository):
    def __init__(self):
        super().__init__(InMemoryKeyValueStore(), 1)

    def get(self, token):
        raise CacheError("disk full")

    def put(self, payload):
        raise CacheError("disk full")


def make_codec(clock: Clock, ttl_days: int = 7) -> tuple[TokenCodec, CachedTokenRepository]:
    repository = CachedTokenRepository(InMemoryKeyValueStore(), 1)
    codec = TokenCodec(repository, InvitationSettings(token_ttl_days=ttl_days), now=clock)
    return codec, repository


class TestTokenCodec:
    """Tests for minting and resolving invitation tokens."""

    @pytest.mark.asyncio
    async def test_mint_then_resolve(self, unit_env):
        """A freshly minted token resolves to its payload."""
        codec = await unit_env.get(TokenCodec)

        token = codec.mint(
            inviter_name="Alice",
            recipient_name="Bob",
            recipient_email=EmailAddress("bob@example.com"),
            inviter_avatar="avatars/alice.png",
        )
        payload = codec.resolve(token)

        assert payload is not None
        assert payload.inviter_name == "Alice"
        assert payload.recipient_email.root == "bob@example.com"
        assert payload.inviter_avatar == "avatars/alice.png"

    def test_tokens_are_unique(self):
        codec, _ = make_codec(Clock(datetime.now(timezone.utc)))
        email = EmailAddress("bob@example.com")

        tokens = {codec.mint("Alice", "Bob", email).root for _ in range(50)}

        assert len(tokens) == 50

    def test_expiry_is_ttl_after_creation(self):
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        codec, _ = make_codec(Clock(start), ttl_days=3)

        payload = codec.resolve(codec.mint("Alice", "Bob", EmailAddress("bob@example.com")))

        assert payload.expires_at == start + timedelta(days=3)

    def test_expired_token_is_purged(self):
        """An expired token resolves to None and its payload is deleted."""
        clock = Clock(datetime(2026, 1, 1, tzinfo=timezone.utc))
        codec, repository = make_codec(clock, ttl_days=7)
        token = codec.mint("Alice", "Bob", EmailAddress("bob@example.com"))

        clock.now = clock.now + timedelta(days=7)

        assert codec.resolve(token) is None
        assert repository.get(token) is None

    def test_unknown_token(self):
        codec, _ = make_codec(Clock(datetime.now(timezone.utc)))
        assert codec.resolve(InvitationToken("inv123_unknown")) is None

    def test_malformed_token_string(self):
        codec, _ = make_codec(Clock(datetime.now(timezone.utc)))
        assert codec.resolve("not a token!") is None

    def test_cache_failure_never_raises(self):
        codec = TokenCodec(FailingTokenRepository(), InvitationSettings())

        token = codec.mint("Alice", "Bob", EmailAddress("bob@example.com"))

        assert token.root.startswith("inv")
        assert codec.resolve(token) is None
