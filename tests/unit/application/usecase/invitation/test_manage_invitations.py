"""Unit tests for cancelling, listing and viewing invitations."""

from datetime import datetime, timedelta, timezone

import pytest

from mingle.application.usecase.invitation import (
    CancelInvitationRequest,
    CancelInvitationUseCase,
    GetInvitationRequest,
    GetInvitationsRequest,
    GetInvitationsUseCase,
    GetInvitationUseCase,
    HandleRegistrationRequest,
    HandleRegistrationUseCase,
    ResolveInvitationTokenRequest,
    ResolveInvitationTokenUseCase,
    SendInvitationRequest,
    SendInvitationUseCase,
    SyncInvitationsRequest,
    SyncInvitationsUseCase,
)
from mingle.domain.error import (
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
)
from mingle.domain.repository import InvitationRepository, ProfileRepository
from mingle.domain.service import InvitationService, NotificationService, TokenCodec
from mingle.domain.value import EmailAddress, InvitationStatus, SyncState, UserId
from tests.conftest import make_invitation, make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId("user-alice")
BOB = UserId("user-bob")


async def send(unit_env, email: str = "bob@example.com"):
    use_case = await unit_env.get(SendInvitationUseCase)
    response = await use_case.execute(
        SendInvitationRequest(inviter_id=str(ALICE), recipient_email=email)
    )
    return response.invitation


class TestCancelInvitationUseCase:
    """Tests for CancelInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_cancel_hides_invitation(self, unit_env):
        """After cancelling, neither the mirror nor the list returns it."""
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        get_invitations = await unit_env.get(GetInvitationsUseCase)
        invitation_service = await unit_env.get(InvitationService)

        response = await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        assert response.invitation.status == InvitationStatus.CANCELLED
        mirrored = {str(i.id) for i in invitation_service.mirror_get_all(ALICE)}
        assert invitation.invitation_id not in mirrored
        listed = await get_invitations.execute(GetInvitationsRequest(inviter_id=str(ALICE)))
        assert listed.invitations == []

    @pytest.mark.asyncio
    async def test_cancelled_listed_on_request(self, unit_env):
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        get_invitations = await unit_env.get(GetInvitationsUseCase)
        await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        listed = await get_invitations.execute(
            GetInvitationsRequest(inviter_id=str(ALICE), status=InvitationStatus.CANCELLED)
        )

        assert [i.invitation_id for i in listed.invitations] == [invitation.invitation_id]

    @pytest.mark.asyncio
    async def test_only_inviter_can_cancel(self, unit_env):
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)

        with pytest.raises(NotAuthorizedError):
            await cancel.execute(
                CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id="user-bob")
            )

    @pytest.mark.asyncio
    async def test_cancel_twice(self, unit_env):
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        request = CancelInvitationRequest(
            invitation_id=invitation.invitation_id, user_id=str(ALICE)
        )
        await cancel.execute(request)

        with pytest.raises(InvalidTransitionError):
            await cancel.execute(request)

    @pytest.mark.asyncio
    async def test_cancel_then_invite_again(self, unit_env):
        """Cancelling frees the pair for a new pending invitation."""
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        again = await send(unit_env)

        assert again.invitation_id != invitation.invitation_id
        assert again.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_cancelled_invitation_sends_no_friend_request(self, unit_env):
        """Signing up after a cancel yields no request from the inviter."""
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        register = await unit_env.get(HandleRegistrationUseCase)
        notification_service = await unit_env.get(NotificationService)
        await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        assert notification_service.pending_friend_requests(EmailAddress("bob@example.com")) == []
        response = await register.execute(
            HandleRegistrationRequest(user_id=str(BOB), email="bob@example.com", username="bob")
        )

        assert response.registered_invitation_ids == []
        assert response.friend_requests == 0
        assert notification_service.list_for(BOB) == []

    @pytest.mark.asyncio
    async def test_cancel_removes_delivered_friend_request(self, unit_env):
        """A recipient who already has an account loses the request from their feed."""
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save(make_profile("user-bob", "Bob", email="bob@example.com"))
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        notification_service = await unit_env.get(NotificationService)
        assert [n.inviter_id for n in notification_service.list_for(BOB)] == [ALICE]

        await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        assert notification_service.list_for(BOB) == []

    @pytest.mark.asyncio
    async def test_cancel_keeps_other_inviters_requests(self, unit_env):
        invitation = await send(unit_env)
        cancel = await unit_env.get(CancelInvitationUseCase)
        notification_service = await unit_env.get(NotificationService)
        email = EmailAddress("bob@example.com")
        notification_service.register_pending_friend_request(
            email, UserId("user-carol"), "Carol Jones"
        )

        await cancel.execute(
            CancelInvitationRequest(invitation_id=invitation.invitation_id, user_id=str(ALICE))
        )

        markers = notification_service.pending_friend_requests(email)
        assert [m.inviter_id for m in markers] == [UserId("user-carol")]


class TestGetInvitationsUseCase:
    @pytest.mark.asyncio
    async def test_newest_first(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        now = datetime.now(timezone.utc)
        older = make_invitation(recipient_email="bob@example.com", sent_at=now - timedelta(days=1))
        newer = make_invitation(recipient_email="carol@example.com", sent_at=now)
        await repository.save(older)
        await repository.save(newer)
        use_case = await unit_env.get(GetInvitationsUseCase)

        response = await use_case.execute(GetInvitationsRequest(inviter_id=str(ALICE)))

        assert [i.invitation_id for i in response.invitations] == [str(newer.id), str(older.id)]
        assert response.from_cache is False

    @pytest.mark.asyncio
    async def test_filter_by_status(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        await repository.save(make_invitation(recipient_email="bob@example.com"))
        declined = make_invitation(
            recipient_email="carol@example.com", status=InvitationStatus.DECLINED
        )
        await repository.save(declined)
        use_case = await unit_env.get(GetInvitationsUseCase)

        response = await use_case.execute(
            GetInvitationsRequest(inviter_id=str(ALICE), status=InvitationStatus.DECLINED)
        )

        assert [i.invitation_id for i in response.invitations] == [str(declined.id)]

    @pytest.mark.asyncio
    async def test_local_records_are_synced_first(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        invitation_service = await unit_env.get(InvitationService)
        local = make_invitation(sync_state=SyncState.PENDING_SYNC)
        invitation_service.mirror_add(local)
        use_case = await unit_env.get(GetInvitationsUseCase)

        response = await use_case.execute(GetInvitationsRequest(inviter_id=str(ALICE)))

        assert [i.sync_state for i in response.invitations] == [SyncState.SYNCED]
        assert await repository.find_by_id(local.id) is not None


class TestGetInvitationUseCase:
    @pytest.mark.asyncio
    async def test_visible_to_recipient_by_email(self, unit_env):
        invitation = await send(unit_env)
        use_case = await unit_env.get(GetInvitationUseCase)

        item = await use_case.execute(
            GetInvitationRequest(
                invitation_id=invitation.invitation_id,
                user_id="user-bob",
                user_email="Bob@Example.com",
            )
        )

        assert item.invitation_id == invitation.invitation_id

    @pytest.mark.asyncio
    async def test_hidden_from_strangers(self, unit_env):
        invitation = await send(unit_env)
        use_case = await unit_env.get(GetInvitationUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                GetInvitationRequest(
                    invitation_id=invitation.invitation_id,
                    user_id="user-eve",
                    user_email="eve@example.com",
                )
            )

    @pytest.mark.asyncio
    async def test_unknown(self, unit_env):
        use_case = await unit_env.get(GetInvitationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetInvitationRequest(
                    invitation_id=str(make_invitation().id), user_id=str(ALICE)
                )
            )


class TestResolveInvitationTokenUseCase:
    @pytest.mark.asyncio
    async def test_resolves_minted_token(self, unit_env):
        codec = await unit_env.get(TokenCodec)
        token = codec.mint(
            "Alice", "Bob", EmailAddress("bob@example.com"), inviter_avatar="avatars/a.png"
        )
        use_case = await unit_env.get(ResolveInvitationTokenUseCase)

        response = await use_case.execute(ResolveInvitationTokenRequest(token=token.root))

        assert response.inviter_name == "Alice"
        assert response.recipient_email == "bob@example.com"
        assert response.inviter_avatar_url == "https://storage.test/avatars/a.png?signature=mock"

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(ResolveInvitationTokenUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(ResolveInvitationTokenRequest(token="inv0_missing"))


class TestSyncInvitationsUseCase:
    @pytest.mark.asyncio
    async def test_sweep_syncs_and_expires(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        invitation_service = await unit_env.get(InvitationService)
        stale = make_invitation(
            recipient_email="old@example.com",
            sent_at=datetime.now(timezone.utc) - timedelta(days=30),
        )
        await repository.save(stale)
        invitation_service.mirror_add(make_invitation(sync_state=SyncState.PENDING_SYNC))
        use_case = await unit_env.get(SyncInvitationsUseCase)

        response = await use_case.execute(SyncInvitationsRequest())

        assert response.synced == 1
        assert response.expired == 1
        assert (await repository.find_by_id(stale.id)).status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_sweep_withdraws_expired_friend_requests(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        notification_service = await unit_env.get(NotificationService)
        email = EmailAddress("old@example.com")
        await repository.save(
            make_invitation(
                recipient_email=email.root,
                sent_at=datetime.now(timezone.utc) - timedelta(days=30),
            )
        )
        notification_service.register_pending_friend_request(email, ALICE, "Alice Smith")
        use_case = await unit_env.get(SyncInvitationsUseCase)

        response = await use_case.execute(SyncInvitationsRequest(inviter_ids=[]))

        assert response.expired == 1
        assert notification_service.pending_friend_requests(email) == []

    @pytest.mark.asyncio
    async def test_sweep_without_expiry(self, unit_env):
        repository = await unit_env.get(InvitationRepository)
        await repository.save(
            make_invitation(sent_at=datetime.now(timezone.utc) - timedelta(days=30))
        )
        use_case = await unit_env.get(SyncInvitationsUseCase)

        response = await use_case.execute(
            SyncInvitationsRequest(inviter_ids=[str(ALICE)], expire_stale=False)
        )

        assert response.synced == 0
        assert response.expired == 0
