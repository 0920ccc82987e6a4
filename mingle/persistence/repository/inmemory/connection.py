"""In-memory connection repository for testing."""

from typing import Optional

from mingle.domain.model import Connection
from mingle.domain.repository.connection import ConnectionRepository
from mingle.domain.value import UserId


class InMemoryConnectionRepository(ConnectionRepository):
    """In-memory implementation of ConnectionRepository for testing."""

    def __init__(self) -> None:
        self._connections: list[Connection] = []

    async def find_edge(
        self, inviter_id: UserId, friend_id: UserId
    ) -> Optional[Connection]:
        for connection in self._connections:
            if connection.inviter_id == inviter_id and connection.friend_id == friend_id:
                return connection
        return None

    async def find_by_inviter(self, user_id: UserId) -> list[Connection]:
        return [c for c in self._connections if c.inviter_id == user_id]

    async def save(self, connection: Connection) -> Connection:
        existing = await self.find_edge(connection.inviter_id, connection.friend_id)
        if existing:
            return existing
        self._connections.append(connection)
        return connection

    def all(self) -> list[Connection]:
        """Every stored edge, for assertions."""
        return list(self._connections)
