"""In-memory repository implementations for testing."""

from .connection import InMemoryConnectionRepository
from .invitation import InMemoryInvitationRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryConnectionRepository",
    "InMemoryInvitationRepository",
    "InMemoryProfileRepository",
]
