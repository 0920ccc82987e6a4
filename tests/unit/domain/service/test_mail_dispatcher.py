"""Unit tests for MailDispatcher."""

import pytest

from mingle.domain.error import (
    ConfigurationSetRejectedError,
    MailProviderError,
    RecipientNotVerifiedError,
    SenderNotVerifiedError,
)
from mingle.domain.repository import ProfileRepository
from mingle.domain.service import (
    MailDispatcher,
    MailSender,
    NotificationService,
    ObjectStorage,
    TokenCodec,
)
from mingle.domain.value import (
    DeliveryErrorKind,
    DeliveryMethod,
    EmailAddress,
    UserId,
)
from tests.conftest import make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

BOB = EmailAddress("bob@example.com")


class TestMailDispatcherSend:
    """Tests for delivering invitation emails."""

    @pytest.mark.asyncio
    async def test_successful_send(self, unit_env):
        """A delivered email carries sign-up and sign-in links for its token."""
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        codec = await unit_env.get(TokenCodec)

        result = await dispatcher.send(
            recipient_email=BOB,
            recipient_name="Bob",
            inviter_name="Alice",
            message="Join me!",
        )

        assert result.success is True
        assert result.method == DeliveryMethod.PROVIDER
        assert result.message_id == "mock-message-1"
        assert result.error_kind is None

        email = sender.sent[0]
        assert email.recipient == "bob@example.com"
        assert email.subject == "Alice invited you to join Mingle"
        assert f"/auth/sign-up?invitation={result.token.root}" in email.text_body
        assert f"/auth/sign-in?invitation={result.token.root}" in email.html_body
        assert "Join me!" in email.text_body

        payload = codec.resolve(result.token)
        assert payload.inviter_name == "Alice"

    @pytest.mark.asyncio
    async def test_defaults_for_missing_names(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)

        await dispatcher.send(BOB, recipient_name=None, inviter_name=None, message=None)

        email = sender.sent[0]
        assert email.subject == "Your friend invited you to join Mingle"
        assert email.text_body.startswith("Hi bob,")

    @pytest.mark.asyncio
    async def test_html_body_is_escaped(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)

        await dispatcher.send(BOB, "Bob", "Alice", message="<script>alert(1)</script>")

        assert "<script>" not in sender.sent[0].html_body
        assert "&lt;script&gt;" in sender.sent[0].html_body

    @pytest.mark.asyncio
    async def test_configuration_set_rejection_retries_raw(self, unit_env):
        """A rejected configuration set is retried once as a raw message."""
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        sender.send_error = ConfigurationSetRejectedError(
            "Configuration set does not exist", "ConfigurationSetDoesNotExist"
        )

        result = await dispatcher.send(BOB, "Bob", "Alice", None)

        assert result.success is True
        assert result.method == DeliveryMethod.PROVIDER_RAW
        assert result.message_id.startswith("mock-raw-message-")
        assert len(sender.sent_raw) == 1

    @pytest.mark.asyncio
    async def test_raw_retry_failure_is_reported(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        sender.send_error = ConfigurationSetRejectedError("Configuration set paused")
        sender.send_raw_error = MailProviderError("Throttling", "Throttling")

        result = await dispatcher.send(BOB, "Bob", "Alice", None)

        assert result.success is False
        assert result.error_kind == DeliveryErrorKind.PROVIDER_ERROR
        assert result.error == "Throttling"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,kind",
        [
            (SenderNotVerifiedError("sender not verified"), DeliveryErrorKind.SENDER_NOT_VERIFIED),
            (
                RecipientNotVerifiedError("recipient not verified"),
                DeliveryErrorKind.RECIPIENT_NOT_VERIFIED,
            ),
            (MailProviderError("boom"), DeliveryErrorKind.PROVIDER_ERROR),
        ],
    )
    async def test_failure_kinds(self, unit_env, error, kind):
        """Other failures are not retried and surface a typed error kind."""
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        sender.send_error = error

        result = await dispatcher.send(BOB, "Bob", "Alice", None)

        assert result.success is False
        assert result.error_kind == kind
        assert result.user_message == kind.user_message
        assert sender.sent_raw == []

    @pytest.mark.asyncio
    async def test_mail_client_fallback(self, unit_env):
        """With the fallback allowed, a failure yields a pre-filled mailto URL."""
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        sender.send_error = SenderNotVerifiedError("sender not verified")

        result = await dispatcher.send(
            BOB, "Bob", "Alice", "Hi Bob", allow_mail_client_fallback=True
        )

        assert result.success is True
        assert result.method == DeliveryMethod.MAIL_CLIENT
        assert result.error_kind == DeliveryErrorKind.MAIL_CLIENT_FALLBACK_USED
        assert result.mail_client_url.startswith("mailto:bob@example.com?subject=")
        assert "invitation%3D" in result.mail_client_url


class TestFriendRequestSideEffect:
    """Tests for the friend request recorded alongside every dispatch."""

    @pytest.mark.asyncio
    async def test_marker_recorded_for_unknown_recipient(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        notifications = await unit_env.get(NotificationService)

        await dispatcher.send(BOB, "Bob", "Alice", None, inviter_id=UserId("user-alice"))

        markers = notifications.pending_friend_requests(BOB)
        assert [m.inviter_id for m in markers] == ["user-alice"]

    @pytest.mark.asyncio
    async def test_existing_recipient_gets_notification_now(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        notifications = await unit_env.get(NotificationService)
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save(make_profile("user-bob", "Bob", email="bob@example.com"))

        await dispatcher.send(BOB, "Bob", "Alice", None, inviter_id=UserId("user-alice"))

        feed = notifications.list_for(UserId("user-bob"))
        assert len(feed) == 1
        assert feed[0].is_friend_request
        assert feed[0].title == "Alice sent you a friend request."
        assert notifications.pending_friend_requests(BOB) == []

    @pytest.mark.asyncio
    async def test_marker_recorded_even_when_delivery_fails(self, unit_env):
        dispatcher = await unit_env.get(MailDispatcher)
        sender = await unit_env.get(MailSender)
        notifications = await unit_env.get(NotificationService)
        sender.send_error = MailProviderError("boom")

        await dispatcher.send(BOB, "Bob", "Alice", None, inviter_id=UserId("user-alice"))

        markers = notifications.pending_friend_requests(BOB)
        assert [m.inviter_id for m in markers] == ["user-alice"]


class TestGatewayInterfaces:
    def test_mail_sender_requires_send_methods(self):
        class SendOnly(MailSender):
            async def send(self, email):
                return "msg-1"

        with pytest.raises(TypeError):
            MailSender()
        with pytest.raises(TypeError):
            SendOnly()

    def test_object_storage_requires_resolve(self):
        with pytest.raises(TypeError):
            ObjectStorage()
