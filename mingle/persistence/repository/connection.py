"""PostgreSQL implementation of Connection repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from mingle.domain.model import Connection
from mingle.domain.repository import ConnectionRepository
from mingle.domain.value import UserId
from mingle.persistence.mappers import connection_to_dict, row_to_connection
from mingle.persistence.repository.error import store_errors
from mingle.persistence.tables import connections_table


class PostgresConnectionRepository(ConnectionRepository):
    """PostgreSQL implementation of ConnectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_edge(
        self, inviter_id: UserId, friend_id: UserId
    ) -> Optional[Connection]:
        stmt = select(connections_table).where(
            and_(
                connections_table.c.inviter_id == inviter_id,
                connections_table.c.friend_id == friend_id,
            )
        )
        async with store_errors("connections.find_edge"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_connection(dict(row)) if row else None

    async def find_by_inviter(self, user_id: UserId) -> list[Connection]:
        stmt = (
            select(connections_table)
            .where(connections_table.c.inviter_id == user_id)
            .order_by(connections_table.c.created_at.asc())
        )
        async with store_errors("connections.find_by_inviter"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_connection(dict(row)) for row in rows]

    async def save(self, connection: Connection) -> Connection:
        """Insert an edge. A concurrent duplicate is resolved to the stored edge."""
        stmt = (
            insert(connections_table)
            .values(**connection_to_dict(connection))
            .on_conflict_do_nothing(constraint="uq_connection_edge")
        )
        async with store_errors("connections.save"):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)

        if result.rowcount == 0:
            existing = await self.find_edge(connection.inviter_id, connection.friend_id)
            if existing:
                return existing
        return connection
