"""User profile and session identity.

Both come from external collaborators: profiles from the profile store,
the current user from the hosted auth service.
"""

from typing import Optional

from mingle.domain.model.common import DomainModel
from mingle.domain.value import UserId


class UserProfile(DomainModel):
    """Display data for a user."""

    user_id: UserId
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    profile_photo_key: Optional[str] = None
    profile_photo_url: Optional[str] = None  # Legacy, may be an expired URL

    @property
    def display_name(self) -> str | None:
        """First and last name, falling back to the username."""
        full = " ".join(p for p in (self.first_name, self.last_name) if p and p.strip())
        return full.strip() or self.username or None


class CurrentUser(DomainModel):
    """Authenticated caller."""

    id: UserId
    username: str
    email: Optional[str] = None  # Email or login id
