"""Domain layer DI providers."""

from dishka import Scope, provide

from mingle.config import AuthSettings, InvitationSettings, Settings
from mingle.domain.repository import (
    ConnectionRepository,
    InvitationMirror,
    InvitationRepository,
    NotificationRepository,
    PendingFriendRequestRepository,
    ProfileRepository,
    TokenRepository,
)
from mingle.domain.service import (
    AuthService,
    ConnectionService,
    InvitationService,
    JWTService,
    MailDispatcher,
    MailSender,
    NotificationService,
    ObjectStorage,
    ProfileService,
    TokenCodec,
)
from mingle.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_auth_service(self, jwt_service: JWTService) -> AuthService:
        return AuthService(jwt_service=jwt_service)

    @provide
    def get_token_codec(
        self, token_repository: TokenRepository, settings: InvitationSettings
    ) -> TokenCodec:
        return TokenCodec(token_repository=token_repository, settings=settings)

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        object_storage: ObjectStorage,
        settings: InvitationSettings,
    ) -> ProfileService:
        return ProfileService(
            profile_repository=profile_repository,
            object_storage=object_storage,
            settings=settings,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        pending_request_repository: PendingFriendRequestRepository,
    ) -> NotificationService:
        return NotificationService(
            notification_repository=notification_repository,
            pending_request_repository=pending_request_repository,
        )

    @provide
    def get_mail_dispatcher(
        self,
        mail_sender: MailSender,
        token_codec: TokenCodec,
        notification_service: NotificationService,
        profile_service: ProfileService,
        settings: Settings,
    ) -> MailDispatcher:
        """Provide invitation email dispatcher."""
        return MailDispatcher(
            mail_sender=mail_sender,
            token_codec=token_codec,
            notification_service=notification_service,
            profile_service=profile_service,
            settings=settings,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        invitation_mirror: InvitationMirror,
        settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            invitation_mirror=invitation_mirror,
            settings=settings,
        )

    @provide
    def get_connection_service(
        self,
        connection_repository: ConnectionRepository,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> ConnectionService:
        """Provide connection domain service."""
        return ConnectionService(
            connection_repository=connection_repository,
            invitation_service=invitation_service,
            profile_service=profile_service,
            notification_service=notification_service,
        )
