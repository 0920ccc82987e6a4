"""Unit tests for domain value objects."""

import pytest

from mingle.domain.error import InvalidTransitionError
from mingle.domain.value import (
    DeliveryErrorKind,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    TextAvatar,
    UserId,
)
from tests.conftest import make_invitation


class TestEmailAddress:
    """Tests for EmailAddress normalization."""

    def test_trims_and_lowercases(self):
        """Stored email is trimmed and lower-cased."""
        assert EmailAddress("  Bob@Example.COM ").root == "bob@example.com"

    def test_equal_after_normalization(self):
        assert EmailAddress("BOB@example.com") == EmailAddress("bob@example.com ")

    @pytest.mark.parametrize("value", ["", "bob", "bob@", "@example.com", "bob@example", "a b@c.com"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            EmailAddress(value)

    def test_local_part(self):
        assert EmailAddress("carol.jones@example.com").local_part == "carol.jones"


class TestInvitationToken:
    def test_accepts_url_safe(self):
        assert InvitationToken("inv18f3a_abc-DEF").root == "inv18f3a_abc-DEF"

    def test_rejects_unsafe_characters(self):
        with pytest.raises(ValueError):
            InvitationToken("abc/def")


class TestInvitationStatus:
    """Tests for the invitation state machine."""

    @pytest.mark.parametrize(
        "target",
        [
            InvitationStatus.ACCEPTED,
            InvitationStatus.DECLINED,
            InvitationStatus.CANCELLED,
            InvitationStatus.EXPIRED,
            InvitationStatus.REGISTERED,
        ],
    )
    def test_pending_can_move_anywhere(self, target):
        assert InvitationStatus.PENDING.can_transition_to(target)

    def test_registered_can_still_be_answered(self):
        assert InvitationStatus.REGISTERED.can_transition_to(InvitationStatus.ACCEPTED)
        assert InvitationStatus.REGISTERED.can_transition_to(InvitationStatus.DECLINED)
        assert not InvitationStatus.REGISTERED.can_transition_to(InvitationStatus.CANCELLED)

    @pytest.mark.parametrize(
        "terminal",
        [
            InvitationStatus.ACCEPTED,
            InvitationStatus.DECLINED,
            InvitationStatus.CANCELLED,
            InvitationStatus.EXPIRED,
        ],
    )
    def test_terminal_statuses_are_final(self, terminal):
        assert not any(terminal.can_transition_to(s) for s in InvitationStatus)

    def test_transition_sets_responded_at(self):
        invitation = make_invitation()

        declined = invitation.transition(InvitationStatus.DECLINED)

        assert declined.status == InvitationStatus.DECLINED
        assert declined.responded_at is not None
        assert invitation.status == InvitationStatus.PENDING

    def test_accept_requires_friend(self):
        invitation = make_invitation()

        with pytest.raises(ValueError):
            invitation.transition(InvitationStatus.ACCEPTED)

        accepted = invitation.transition(InvitationStatus.ACCEPTED, friend_id=UserId("user-bob"))
        assert accepted.friend_id == "user-bob"

    def test_transition_out_of_terminal_raises(self):
        cancelled = make_invitation(status=InvitationStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            cancelled.transition(InvitationStatus.PENDING)


class TestInvitation:
    def test_recipient_name_defaults_to_local_part(self):
        invitation = make_invitation(recipient_email="Dana@Example.com")
        assert invitation.recipient_name == "dana"


class TestDeliveryErrorKind:
    def test_every_kind_has_a_user_message(self):
        assert all(kind.user_message for kind in DeliveryErrorKind)


class TestTextAvatar:
    def test_uses_initial(self):
        assert TextAvatar.for_name("alice").text == "A"

    def test_blank_name(self):
        assert TextAvatar.for_name("  ").text == "?"
