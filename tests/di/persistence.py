"""Mock persistence providers for testing."""

from dishka import Scope, provide

from mingle.domain.repository import (
    ConnectionRepository,
    InvitationRepository,
    ProfileRepository,
)
from mingle.persistence.repository.inmemory import (
    InMemoryConnectionRepository,
    InMemoryInvitationRepository,
    InMemoryProfileRepository,
)
from mingle.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so records survive across requests within one
    container; each test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_connection_repository(self) -> ConnectionRepository:
        """Provide in-memory connection repository."""
        return InMemoryConnectionRepository()

    @provide(scope=Scope.APP)
    def get_profile_repository(self) -> ProfileRepository:
        """Provide in-memory profile repository."""
        return InMemoryProfileRepository()
