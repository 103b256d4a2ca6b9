"""
Per-tab session state for working through sparks on one goal.

Idle -> Active on start_session; while active, a spark is either presented
(current_spark set) or awaited (current_spark None). Completing the presented
spark appends it to the chain and goes back to awaiting. State lives only in
memory and every transition is synchronous.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    session_id: Optional[str] = None
    goal_id: Optional[str] = None
    current_spark: Optional[Dict[str, Any]] = None
    completed_sparks: List[Dict[str, Any]] = field(default_factory=list)
    chain_length: int = 0
    is_active: bool = False


class SessionStore:
    """Holds one SessionState and the transitions allowed on it."""

    def __init__(self):
        self.state = SessionState()

    @property
    def session_id(self) -> Optional[str]:
        return self.state.session_id

    @property
    def current_spark(self) -> Optional[Dict[str, Any]]:
        return self.state.current_spark

    @property
    def chain_length(self) -> int:
        return self.state.chain_length

    @property
    def completed_sparks(self) -> List[Dict[str, Any]]:
        return self.state.completed_sparks

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def start_session(self, goal_id: str) -> str:
        """Begin a fresh chain for a goal. Prior completions are discarded."""
        self.state.session_id = str(uuid.uuid4())
        self.state.goal_id = goal_id
        self.state.is_active = True
        self.state.completed_sparks = []
        self.state.chain_length = 0
        logger.debug(f"Started session {self.state.session_id} for goal {goal_id}")
        return self.state.session_id

    def end_session(self):
        """Mark the session inactive, keeping its chain for a summary."""
        self.state.is_active = False

    def set_current_spark(self, spark: Optional[Dict[str, Any]]):
        self.state.current_spark = spark

    def add_completed_spark(self, completion: Dict[str, Any]):
        self.state.completed_sparks = [*self.state.completed_sparks, completion]

    def increment_chain(self):
        self.state.chain_length += 1

    def record_completion(self, completion: Dict[str, Any]):
        """Append a completion, grow the chain by one and clear the presented spark."""
        self.add_completed_spark(completion)
        self.increment_chain()
        self.set_current_spark(None)

    def reset_session(self):
        """Clear every field back to the idle state."""
        self.state = SessionState()
