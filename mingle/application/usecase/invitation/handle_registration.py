"""Post-registration hook use case."""

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.domain.error import PersistenceError
from mingle.domain.model import UserProfile
from mingle.domain.service import (
    ConnectionService,
    NotificationService,
    ProfileService,
    parse_email,
)
from mingle.domain.value import UserId


class HandleRegistrationRequest(BaseModel):
    """Details of a user who just signed up."""

    user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None


class HandleRegistrationResponse(BaseModel):
    registered_invitation_ids: list[str]
    friend_requests: int


class HandleRegistrationUseCase(BaseUseCase):
    """Use case run once a new account exists.

    Stores the profile, then connects the user with everyone who invited
    their email.
    """

    def __init__(
        self,
        connection_service: ConnectionService,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> None:
        self.connection_service = connection_service
        self.profile_service = profile_service
        self.notification_service = notification_service

    async def execute(
        self, request: HandleRegistrationRequest
    ) -> HandleRegistrationResponse:
        """Execute registration hook.

        Raises:
            ValidationError: If the email is malformed
        """
        email = parse_email(request.email)
        user_id = UserId(request.user_id)

        with logfire.span("handle_registration", user_id=str(user_id)):
            try:
                await self.profile_service.ensure_profile(
                    UserProfile(
                        user_id=user_id,
                        first_name=request.first_name,
                        last_name=request.last_name,
                        username=request.username,
                        email=email.root,
                    )
                )
            except PersistenceError as e:
                logfire.error("Profile not saved at registration", error=str(e))

            registered = await self.connection_service.handle_registration(email, user_id)
            friend_requests = [
                n
                for n in self.notification_service.list_for(user_id)
                if n.is_friend_request
            ]
            return HandleRegistrationResponse(
                registered_invitation_ids=[str(i.id) for i in registered],
                friend_requests=len(friend_requests),
            )
