"""Profile repository."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..connection import Database
from ..models import ProfileDB, PremiumTierEnum
from ..exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db: Database):
        self.db = db

    async def get_or_create(self, user_id: str) -> ProfileDB:
        """Get the user's profile, creating a free-tier one on first access."""
        async with self.db.session() as session:
            result = await session.execute(
                select(ProfileDB).where(ProfileDB.id == user_id)
            )
            profile = result.scalar_one_or_none()
            if profile:
                return profile

            try:
                profile = ProfileDB(
                    id=user_id,
                    display_name=None,
                    avatar_url=None,
                    premium_tier=PremiumTierEnum.FREE.value,
                )
                session.add(profile)
                await session.flush()

                logger.info(f"Created profile for user {user_id}")
                return profile

            except IntegrityError as e:
                # Another request created it first
                logger.info(f"Profile for {user_id} created concurrently, reloading: {e.orig}")
                await session.rollback()
                result = await session.execute(
                    select(ProfileDB).where(ProfileDB.id == user_id)
                )
                profile = result.scalar_one_or_none()
                if profile is None:
                    raise DatabaseOperationError(f"Failed to create profile for {user_id}")
                return profile

            except Exception as e:
                logger.error(f"Profile creation failed for {user_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to create profile: {e}")
