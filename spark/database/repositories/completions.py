"""
Spark completion repository.

Recording a completion and bumping the goal's counter happen in the same
transaction, so the counter never drifts from the completion log.
"""

import logging
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from ..connection import Database
from ..models import SparkCompletionDB
from ..exceptions import (
    DatabaseConstraintError,
    DatabaseOperationError,
    DuplicateCompletionError,
)
from .goals import increment_sparks_statement

logger = logging.getLogger(__name__)


class CompletionRepository:
    """Repository for spark completion operations."""

    def __init__(self, db: Database):
        self.db = db

    async def complete(
        self,
        user_id: str,
        spark_id: str,
        goal_id: str,
        session_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SparkCompletionDB:
        """
        Record that a user completed a spark and increment the goal counter.

        Raises:
            DuplicateCompletionError: the user already completed this spark.
        """
        async with self.db.session() as session:
            existing = await session.execute(
                select(SparkCompletionDB.id)
                .where(
                    SparkCompletionDB.user_id == user_id,
                    SparkCompletionDB.spark_id == spark_id,
                )
            )
            if existing.scalar_one_or_none() is not None:
                raise DuplicateCompletionError("Spark already completed")

            try:
                completion = SparkCompletionDB(
                    user_id=user_id,
                    spark_id=spark_id,
                    goal_id=goal_id,
                    session_id=session_id,
                    notes=notes,
                )
                session.add(completion)
                await session.flush()

                await session.execute(increment_sparks_statement(goal_id))

            except IntegrityError as e:
                if "uq_completions_user_spark" in str(e.orig):
                    raise DuplicateCompletionError("Spark already completed")
                logger.error(f"Constraint violation completing spark {spark_id}: {e}")
                raise DatabaseConstraintError(f"Cannot complete spark {spark_id}: {e.orig}")

            except Exception as e:
                logger.error(f"Completion failed for spark {spark_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to complete spark: {e}")

            logger.info(f"User {user_id} completed spark {spark_id} (goal {goal_id})")
            return completion

    async def get_completed_for_goal(
        self,
        goal_id: str,
        user_id: str
    ) -> List[SparkCompletionDB]:
        """Get the user's completions for a goal with spark details, newest first."""
        async with self.db.session() as session:
            result = await session.execute(
                select(SparkCompletionDB)
                .options(selectinload(SparkCompletionDB.spark))
                .where(
                    SparkCompletionDB.goal_id == goal_id,
                    SparkCompletionDB.user_id == user_id,
                )
                .order_by(SparkCompletionDB.completed_at.desc())
            )
            return list(result.scalars().all())
