"""
Goal repository.

Every query is scoped to the owning user: a goal that exists but belongs to
someone else is indistinguishable from a goal that does not exist.
"""

import logging
from typing import Optional, List, Dict, Any

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.dml import Update

from ..connection import Database
from ..models import GoalDB, GoalStatusEnum, utcnow
from ..exceptions import DatabaseConstraintError, DatabaseOperationError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status")


def increment_sparks_statement(goal_id: str) -> Update:
    """Atomic ``total_sparks_completed + 1`` evaluated by the database."""
    return (
        update(GoalDB)
        .where(GoalDB.id == goal_id)
        .values(total_sparks_completed=GoalDB.total_sparks_completed + 1)
    )


class GoalRepository:
    """Repository for goal operations."""

    def __init__(self, db: Database):
        self.db = db

    async def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> GoalDB:
        """Create a new active goal with no completed sparks."""
        async with self.db.session() as session:
            try:
                goal = GoalDB(
                    user_id=user_id,
                    title=title,
                    description=description,
                    status=GoalStatusEnum.ACTIVE.value,
                    total_sparks_completed=0,
                )
                session.add(goal)
                await session.flush()

                logger.info(f"Created goal {goal.id} for user {user_id}")
                return goal

            except IntegrityError as e:
                logger.error(f"Constraint violation creating goal for {user_id}: {e}")
                raise DatabaseConstraintError(f"Cannot create goal: {e.orig}")

            except Exception as e:
                logger.error(f"Goal creation failed for {user_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to create goal: {e}")

    async def get_all_for_user(self, user_id: str) -> List[GoalDB]:
        """Get all goals owned by a user, newest first."""
        async with self.db.session() as session:
            result = await session.execute(
                select(GoalDB)
                .where(GoalDB.user_id == user_id)
                .order_by(GoalDB.created_at.desc())
            )
            return list(result.scalars().all())

    async def get_for_owner(self, goal_id: str, user_id: str) -> Optional[GoalDB]:
        """Get a goal by ID if it belongs to the user."""
        async with self.db.session() as session:
            result = await session.execute(
                select(GoalDB)
                .where(GoalDB.id == goal_id, GoalDB.user_id == user_id)
            )
            return result.scalar_one_or_none()

    async def update(
        self,
        goal_id: str,
        user_id: str,
        updates: Dict[str, Any]
    ) -> Optional[GoalDB]:
        """Apply a partial update. Always refreshes updated_at."""
        values = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        values["updated_at"] = utcnow()

        async with self.db.session() as session:
            try:
                await session.execute(
                    update(GoalDB)
                    .where(GoalDB.id == goal_id, GoalDB.user_id == user_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )

                result = await session.execute(
                    select(GoalDB)
                    .where(GoalDB.id == goal_id, GoalDB.user_id == user_id)
                )
                return result.scalar_one_or_none()

            except Exception as e:
                logger.error(f"Goal update failed for {goal_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to update goal: {e}")

    async def delete(self, goal_id: str, user_id: str) -> bool:
        """Hard delete a goal. Sparks and completions go with it via ON DELETE CASCADE."""
        async with self.db.session() as session:
            try:
                result = await session.execute(
                    delete(GoalDB)
                    .where(GoalDB.id == goal_id, GoalDB.user_id == user_id)
                )
            except Exception as e:
                logger.error(f"Goal delete failed for {goal_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to delete goal: {e}")

            deleted = (result.rowcount or 0) > 0
            if deleted:
                logger.info(f"Deleted goal {goal_id}")
            return deleted
