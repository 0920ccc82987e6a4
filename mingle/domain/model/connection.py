"""Connection entity.

A directed "is-friend-of" edge. Accepted invitations and friend requests
always produce two edges so adjacency lookups work from either side.
"""

from datetime import datetime, timezone

from pydantic import Field

from mingle.domain.model.common import DomainModel
from mingle.domain.value import ConnectionId, UserId


class Connection(DomainModel):
    """Directed friend edge from ``inviter_id`` to ``friend_id``."""

    id: ConnectionId
    inviter_id: UserId
    friend_id: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ConnectionPair(DomainModel):
    """Outcome of creating both edges between two users.

    Either edge may be missing when its write failed; the other is kept.
    """

    forward: Connection | None = None
    backward: Connection | None = None

    @property
    def complete(self) -> bool:
        return self.forward is not None and self.backward is not None
