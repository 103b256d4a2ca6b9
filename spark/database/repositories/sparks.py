"""
Spark repository.

Sparks are append-only. The next sequence number is computed inside the
insert transaction; the (goal_id, sequence_number) unique constraint turns a
concurrent double allocation into a constraint error instead of a duplicate.
"""

import logging
from typing import Optional, List

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from ..connection import Database
from ..models import SparkDB
from ..exceptions import DatabaseConstraintError, DatabaseOperationError

logger = logging.getLogger(__name__)


class SparkRepository:
    """Repository for spark operations."""

    def __init__(self, db: Database):
        self.db = db

    async def get_for_goal(self, goal_id: str) -> List[SparkDB]:
        """Get all sparks for a goal ordered by sequence number."""
        async with self.db.session() as session:
            result = await session.execute(
                select(SparkDB)
                .where(SparkDB.goal_id == goal_id)
                .order_by(SparkDB.sequence_number.asc())
            )
            return list(result.scalars().all())

    async def get_by_id(self, spark_id: str) -> Optional[SparkDB]:
        """Get a spark by ID."""
        async with self.db.session() as session:
            result = await session.execute(
                select(SparkDB).where(SparkDB.id == spark_id)
            )
            return result.scalar_one_or_none()

    async def create_next(
        self,
        goal_id: str,
        title: str,
        description: Optional[str],
        effort_minutes: int,
        resource_link: Optional[str] = None,
        ai_generated: bool = True,
    ) -> SparkDB:
        """Persist a spark as the next one in its goal's sequence."""
        async with self.db.session() as session:
            try:
                count_result = await session.execute(
                    select(func.count(SparkDB.id)).where(SparkDB.goal_id == goal_id)
                )
                next_sequence = (count_result.scalar_one() or 0) + 1

                spark = SparkDB(
                    goal_id=goal_id,
                    title=title,
                    description=description,
                    effort_minutes=effort_minutes,
                    resource_link=resource_link,
                    ai_generated=ai_generated,
                    sequence_number=next_sequence,
                )
                session.add(spark)
                await session.flush()

                logger.info(f"Created spark #{next_sequence} for goal {goal_id}")
                return spark

            except IntegrityError as e:
                logger.error(f"Constraint violation creating spark for goal {goal_id}: {e}")
                raise DatabaseConstraintError(
                    f"Spark sequence for goal {goal_id} was allocated concurrently"
                )

            except Exception as e:
                logger.error(f"Spark creation failed for goal {goal_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to save spark: {e}")
