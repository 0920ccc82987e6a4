"""PostgreSQL repository implementations."""

from mingle.persistence.repository.connection import PostgresConnectionRepository
from mingle.persistence.repository.invitation import PostgresInvitationRepository
from mingle.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresConnectionRepository",
    "PostgresInvitationRepository",
    "PostgresProfileRepository",
]
