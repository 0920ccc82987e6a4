"""Connection repository interface."""

from abc import ABC, abstractmethod

from mingle.domain.model.connection import Connection
from mingle.domain.value import UserId


class ConnectionRepository(ABC):
    """Repository for directed Connection edges."""

    @abstractmethod
    async def find_edge(self, inviter_id: UserId, friend_id: UserId) -> Connection | None:
        """Find the directed edge inviter_id -> friend_id.

        Args:
            inviter_id: Edge source
            friend_id: Edge target

        Returns:
            The connection if it exists
        """
        pass

    @abstractmethod
    async def find_by_inviter(self, user_id: UserId) -> list[Connection]:
        """Find all edges starting at ``user_id``.

        Args:
            user_id: Edge source

        Returns:
            Outgoing connections, oldest first
        """
        pass

    @abstractmethod
    async def save(self, connection: Connection) -> Connection:
        """Persist a new edge.

        Args:
            connection: Connection to store

        Returns:
            The stored connection
        """
        pass
