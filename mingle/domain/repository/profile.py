"""Profile repository interface."""

from abc import ABC, abstractmethod

from mingle.domain.model.profile import UserProfile
from mingle.domain.value import UserId


class ProfileRepository(ABC):
    """Profile store: display name and avatar lookups."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> UserProfile | None:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> UserProfile | None:
        """Find a profile by normalized email.

        Used to detect recipients who already have an account.
        """
        pass

    @abstractmethod
    async def save(self, profile: UserProfile) -> UserProfile:
        pass
