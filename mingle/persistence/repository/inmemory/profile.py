"""In-memory profile repository for testing."""

from typing import Optional

from mingle.domain.model import UserProfile
from mingle.domain.repository.profile import ProfileRepository
from mingle.domain.value import UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, UserProfile] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    async def find_by_email(self, email: str) -> Optional[UserProfile]:
        normalized = email.strip().lower()
        for profile in self._profiles.values():
            if profile.email and profile.email.strip().lower() == normalized:
                return profile
        return None

    async def save(self, profile: UserProfile) -> UserProfile:
        self._profiles[profile.user_id] = profile
        return profile
