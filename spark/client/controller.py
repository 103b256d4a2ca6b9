"""
Drives one goal's working session: fetch the goal, generate a spark, complete
it, repeat. API calls are awaited one at a time; state only changes after a
call succeeds.
"""

import logging
from typing import Any, Dict, List, Optional

from .api import SparkApiClient
from .session import SessionStore

logger = logging.getLogger(__name__)


class NoActiveSpark(Exception):
    """complete_current was called with nothing presented."""
    pass


class SparkSessionController:
    """Glue between the API client and the session store."""

    def __init__(self, api: SparkApiClient, store: Optional[SessionStore] = None):
        self.api = api
        self.store = store or SessionStore()
        self.goal: Optional[Dict[str, Any]] = None

    async def enter_goal(self, goal_id: str) -> Dict[str, Any]:
        """Load the goal and start a fresh session for it."""
        goal = await self.api.get_goal(goal_id)
        self.goal = goal
        self.store.start_session(goal_id)
        self.store.set_current_spark(None)
        return goal

    async def generate_next(self) -> Dict[str, Any]:
        """Ask the API for the next spark and present it."""
        if self.goal is None:
            raise RuntimeError("enter_goal must be called first")

        spark = await self.api.generate_spark(
            goal_id=self.goal["id"],
            goal_title=self.goal["title"],
            goal_description=self.goal.get("description"),
        )
        self.store.set_current_spark(spark)
        return spark

    async def complete_current(self, notes: Optional[str] = None) -> Dict[str, Any]:
        """Complete the presented spark and extend the chain."""
        spark = self.store.current_spark
        if spark is None or self.store.session_id is None or self.goal is None:
            raise NoActiveSpark("No spark is currently presented")

        completion = await self.api.complete_spark(
            spark_id=spark["id"],
            goal_id=self.goal["id"],
            session_id=self.store.session_id,
            notes=notes,
        )
        self.store.record_completion(completion)
        logger.info(f"Chain length {self.store.chain_length} on goal {self.goal['id']}")
        return completion

    def end(self):
        self.store.end_session()

    def leave(self):
        """Navigating away discards the session entirely."""
        self.store.reset_session()
        self.goal = None

    def summary(self) -> Dict[str, Any]:
        completions: List[Dict[str, Any]] = list(self.store.completed_sparks)
        return {
            "goal": self.goal,
            "chain_length": self.store.chain_length,
            "completed_sparks": completions,
        }
