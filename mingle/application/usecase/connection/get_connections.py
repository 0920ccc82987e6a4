"""Get connections use case."""

import asyncio
from datetime import datetime

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.domain.service import ConnectionService, ProfileService
from mingle.domain.value import TextAvatar, UserId


class GetConnectionsRequest(BaseModel):
    user_id: str


class ConnectionItem(BaseModel):
    """A friend of the caller."""

    connection_id: str
    friend_id: str
    display_name: str
    username: str | None
    avatar_url: str | None
    text_avatar: TextAvatar | None
    connected_at: datetime


class GetConnectionsResponse(BaseModel):
    connections: list[ConnectionItem]


class GetConnectionsUseCase(BaseUseCase):
    """Use case for listing the caller's friends with their profiles."""

    def __init__(
        self, connection_service: ConnectionService, profile_service: ProfileService
    ) -> None:
        self.connection_service = connection_service
        self.profile_service = profile_service

    async def execute(self, request: GetConnectionsRequest) -> GetConnectionsResponse:
        user_id = UserId(request.user_id)

        with logfire.span("get_connections", user_id=str(user_id)):
            entries = await self.connection_service.list_connections(user_id)

            keys = []
            for _, profile in entries:
                key = None
                if profile is not None:
                    key = profile.profile_photo_key or (
                        self.profile_service.extract_key_from_url(profile.profile_photo_url)
                        if profile.profile_photo_url
                        else None
                    )
                keys.append(key)
            avatars = await asyncio.gather(
                *(self.profile_service.avatar_url(k) for k in keys)
            )

            items = []
            for (connection, profile), avatar in zip(entries, avatars):
                name = (
                    profile.display_name if profile else None
                ) or self.profile_service.default_name
                items.append(
                    ConnectionItem(
                        connection_id=str(connection.id),
                        friend_id=connection.friend_id,
                        display_name=name,
                        username=profile.username if profile else None,
                        avatar_url=avatar,
                        text_avatar=None if avatar else TextAvatar.for_name(name),
                        connected_at=connection.created_at,
                    )
                )
            return GetConnectionsResponse(connections=items)
