"""Application layer DI providers."""

from dishka import Scope, provide

from mingle.application.usecase.connection import GetConnectionsUseCase
from mingle.application.usecase.invitation import (
    CancelInvitationUseCase,
    GetInvitationsUseCase,
    GetInvitationUseCase,
    HandleRegistrationUseCase,
    ResendInvitationUseCase,
    ResolveInvitationTokenUseCase,
    RespondToInvitationUseCase,
    SendInvitationUseCase,
    SyncInvitationsUseCase,
)
from mingle.application.usecase.notification import (
    GetNotificationsUseCase,
    MarkNotificationReadUseCase,
    RespondToFriendRequestUseCase,
    SendFriendRequestUseCase,
)
from mingle.config import Settings
from mingle.domain.service import (
    ConnectionService,
    InvitationService,
    MailDispatcher,
    NotificationService,
    ProfileService,
    TokenCodec,
)
from mingle.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invitation use cases
    @provide
    def get_send_invitation_use_case(
        self,
        invitation_service: InvitationService,
        mail_dispatcher: MailDispatcher,
        profile_service: ProfileService,
        settings: Settings,
    ) -> SendInvitationUseCase:
        """Provide send invitation use case."""
        return SendInvitationUseCase(
            invitation_service=invitation_service,
            mail_dispatcher=mail_dispatcher,
            profile_service=profile_service,
            settings=settings,
        )

    @provide
    def get_resend_invitation_use_case(
        self, invitation_service: InvitationService, mail_dispatcher: MailDispatcher
    ) -> ResendInvitationUseCase:
        return ResendInvitationUseCase(
            invitation_service=invitation_service, mail_dispatcher=mail_dispatcher
        )

    @provide
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService, connection_service: ConnectionService
    ) -> CancelInvitationUseCase:
        return CancelInvitationUseCase(
            invitation_service=invitation_service, connection_service=connection_service
        )

    @provide
    def get_respond_to_invitation_use_case(
        self,
        invitation_service: InvitationService,
        connection_service: ConnectionService,
        notification_service: NotificationService,
    ) -> RespondToInvitationUseCase:
        return RespondToInvitationUseCase(
            invitation_service=invitation_service,
            connection_service=connection_service,
            notification_service=notification_service,
        )

    @provide
    def get_resolve_invitation_token_use_case(
        self, token_codec: TokenCodec, profile_service: ProfileService
    ) -> ResolveInvitationTokenUseCase:
        return ResolveInvitationTokenUseCase(
            token_codec=token_codec, profile_service=profile_service
        )

    @provide
    def get_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationsUseCase:
        return GetInvitationsUseCase(invitation_service=invitation_service)

    @provide
    def get_invitation_use_case(
        self, invitation_service: InvitationService, profile_service: ProfileService
    ) -> GetInvitationUseCase:
        return GetInvitationUseCase(
            invitation_service=invitation_service, profile_service=profile_service
        )

    @provide
    def get_handle_registration_use_case(
        self,
        connection_service: ConnectionService,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> HandleRegistrationUseCase:
        """Provide post-registration hook use case."""
        return HandleRegistrationUseCase(
            connection_service=connection_service,
            profile_service=profile_service,
            notification_service=notification_service,
        )

    @provide
    def get_sync_invitations_use_case(
        self, invitation_service: InvitationService, connection_service: ConnectionService
    ) -> SyncInvitationsUseCase:
        return SyncInvitationsUseCase(
            invitation_service=invitation_service, connection_service=connection_service
        )

    # Notification use cases
    @provide
    def get_notifications_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationsUseCase:
        return GetNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide
    def get_respond_to_friend_request_use_case(
        self,
        notification_service: NotificationService,
        connection_service: ConnectionService,
        invitation_service: InvitationService,
    ) -> RespondToFriendRequestUseCase:
        return RespondToFriendRequestUseCase(
            notification_service=notification_service,
            connection_service=connection_service,
            invitation_service=invitation_service,
        )

    @provide
    def get_send_friend_request_use_case(
        self,
        notification_service: NotificationService,
        connection_service: ConnectionService,
        profile_service: ProfileService,
    ) -> SendFriendRequestUseCase:
        return SendFriendRequestUseCase(
            notification_service=notification_service,
            connection_service=connection_service,
            profile_service=profile_service,
        )

    # Connection use cases
    @provide
    def get_connections_use_case(
        self, connection_service: ConnectionService, profile_service: ProfileService
    ) -> GetConnectionsUseCase:
        return GetConnectionsUseCase(
            connection_service=connection_service, profile_service=profile_service
        )
