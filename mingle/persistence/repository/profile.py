"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from mingle.domain.model import UserProfile
from mingle.domain.repository import ProfileRepository
from mingle.domain.value import UserId
from mingle.persistence.mappers import profile_to_dict, row_to_profile
from mingle.persistence.repository.error import store_errors
from mingle.persistence.tables import user_profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        stmt = select(user_profiles_table).where(user_profiles_table.c.user_id == user_id)
        async with store_errors("user_profiles.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[UserProfile]:
        stmt = select(user_profiles_table).where(
            user_profiles_table.c.email == email.strip().lower()
        )
        async with store_errors("user_profiles.find_by_email"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def save(self, profile: UserProfile) -> UserProfile:
        """Insert or update a profile."""
        values = profile_to_dict(profile)
        stmt = insert(user_profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[user_profiles_table.c.user_id],
            set_={
                **{k: v for k, v in values.items() if k != "user_id"},
                "updated_at": func.now(),
            },
        )
        async with store_errors("user_profiles.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return profile
