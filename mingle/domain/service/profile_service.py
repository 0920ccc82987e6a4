"""Profile domain service."""

from abc import ABC, abstractmethod

import logfire

from mingle.config import InvitationSettings
from mingle.domain.model.profile import UserProfile
from mingle.domain.repository import ProfileRepository
from mingle.domain.value import EmailAddress, UserId

from .base import Service


class ObjectStorage(ABC):
    """Object storage interface for profile photos."""

    @abstractmethod
    async def resolve(self, key: str) -> str | None:
        """Resolve a storage key to a fetchable (time-limited) URL.

        Args:
            key: Object key

        Returns:
            URL, or None when the key cannot be resolved
        """
        pass


class ProfileService(Service):
    """Domain service for display names and avatars.

    Avatars are stored as object keys; URLs are resolved on every read
    because they expire.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        object_storage: ObjectStorage,
        settings: InvitationSettings,
    ) -> None:
        self.profile_repository = profile_repository
        self.object_storage = object_storage
        self.default_name = settings.default_inviter_name

    async def get(self, user_id: UserId) -> UserProfile | None:
        """Get a profile, or None when it is missing."""
        return await self.profile_repository.find_by_id(user_id)

    async def find_user_id_by_email(self, email: EmailAddress) -> UserId | None:
        """Find the user id of a registered account by email.

        Lookup failures are logged and treated as "no such user".
        """
        try:
            profile = await self.profile_repository.find_by_email(email.root)
        except Exception as e:
            logfire.warn("Profile lookup by email failed", email=email.root, error=str(e))
            return None
        return profile.user_id if profile else None

    async def display_name(self, user_id: UserId, fallback: str | None = None) -> str:
        """Resolve a user's display name.

        Args:
            user_id: User ID
            fallback: Name to use when the profile has none

        Returns:
            First and last name, username, ``fallback``, or the default placeholder
        """
        try:
            profile = await self.profile_repository.find_by_id(user_id)
        except Exception as e:
            logfire.warn("Profile lookup failed", user_id=str(user_id), error=str(e))
            profile = None

        name = profile.display_name if profile else None
        return name or fallback or self.default_name

    async def avatar_key(self, user_id: UserId) -> str | None:
        """Storage key of a user's profile photo, if any."""
        try:
            profile = await self.profile_repository.find_by_id(user_id)
        except Exception as e:
            logfire.warn("Profile lookup failed", user_id=str(user_id), error=str(e))
            return None
        if profile is None:
            return None
        if profile.profile_photo_key:
            return profile.profile_photo_key
        if profile.profile_photo_url:
            return self.extract_key_from_url(profile.profile_photo_url)
        return None

    async def avatar_url(self, key: str | None) -> str | None:
        """Resolve an avatar storage key to a URL. Failures yield None."""
        if not key:
            return None
        try:
            return await self.object_storage.resolve(key)
        except Exception as e:
            logfire.warn("Avatar URL resolution failed", key=key, error=str(e))
            return None

    @staticmethod
    def extract_key_from_url(url: str) -> str | None:
        """Recover the object key from a previously stored URL.

        Handles legacy presigned URLs saved in profiles, e.g.
        ``https://bucket.s3.amazonaws.com/public/avatars/u1.png?X-Amz-...``
        yields ``avatars/u1.png``.
        """
        if not url:
            return None
        if "://" not in url:
            # Already a key
            key = url
        else:
            path = url.split("://", 1)[1]
            if "/" not in path:
                return None
            key = path.split("/", 1)[1]
        key = key.split("?", 1)[0].split("#", 1)[0]
        if key.startswith("public/"):
            key = key[len("public/") :]
        return key or None

    async def ensure_profile(self, profile: UserProfile) -> UserProfile:
        """Create or update a profile (sign-up hook)."""
        with logfire.span("profile_service.ensure_profile", user_id=str(profile.user_id)):
            saved = await self.profile_repository.save(profile)
            logfire.info("Profile saved", user_id=str(saved.user_id))
            return saved
