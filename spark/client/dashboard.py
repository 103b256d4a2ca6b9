"""
Dashboard view state as a single tagged variant.

One ``DashboardView`` tag decides what the dashboard shows; the payload fields
that tag needs travel with it. Transitions return a new state and refuse to
start from a view where they make no sense.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DashboardView(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    GOAL_SELECTED = "goal_selected"
    SPARK_PRESENTED = "spark_presented"
    COMPLETED = "completed"
    PROGRESS = "progress"


class InvalidTransition(Exception):
    """A transition was requested from a view that does not allow it."""

    def __init__(self, action: str, view: DashboardView):
        super().__init__(f"Cannot {action} from {view.value}")
        self.action = action
        self.view = view


@dataclass(frozen=True)
class DashboardState:
    view: DashboardView = DashboardView.IDLE
    goal: Optional[Dict[str, Any]] = None
    spark: Optional[Dict[str, Any]] = None
    completed_sparks: Tuple[Dict[str, Any], ...] = ()

    def _require(self, action: str, *allowed: DashboardView):
        if self.view not in allowed:
            raise InvalidTransition(action, self.view)

    def begin_create(self) -> "DashboardState":
        self._require(
            "begin creating a goal",
            DashboardView.IDLE, DashboardView.GOAL_SELECTED, DashboardView.PROGRESS,
        )
        return DashboardState(view=DashboardView.CREATING)

    def cancel_create(self) -> "DashboardState":
        self._require("cancel goal creation", DashboardView.CREATING)
        return DashboardState()

    def select_goal(self, goal: Dict[str, Any]) -> "DashboardState":
        """Focus a goal. Switching goals drops the previous goal's spark and progress."""
        self._require(
            "select a goal",
            DashboardView.IDLE,
            DashboardView.CREATING,
            DashboardView.GOAL_SELECTED,
            DashboardView.COMPLETED,
            DashboardView.PROGRESS,
        )
        same_goal = self.goal is not None and self.goal.get("id") == goal.get("id")
        return DashboardState(
            view=DashboardView.GOAL_SELECTED,
            goal=goal,
            completed_sparks=self.completed_sparks if same_goal else (),
        )

    def present_spark(self, spark: Dict[str, Any]) -> "DashboardState":
        self._require("present a spark", DashboardView.GOAL_SELECTED, DashboardView.COMPLETED)
        return replace(self, view=DashboardView.SPARK_PRESENTED, spark=spark)

    def complete_spark(self, completion: Dict[str, Any]) -> "DashboardState":
        self._require("complete a spark", DashboardView.SPARK_PRESENTED)
        return replace(
            self,
            view=DashboardView.COMPLETED,
            spark=None,
            completed_sparks=(*self.completed_sparks, completion),
        )

    def show_progress(self, completed_sparks: Tuple[Dict[str, Any], ...]) -> "DashboardState":
        self._require(
            "show progress",
            DashboardView.GOAL_SELECTED,
            DashboardView.SPARK_PRESENTED,
            DashboardView.COMPLETED,
        )
        return replace(
            self,
            view=DashboardView.PROGRESS,
            spark=None,
            completed_sparks=tuple(completed_sparks),
        )

    def reset(self) -> "DashboardState":
        return DashboardState()

    def describe(self) -> str:
        """One-line summary of what the view shows."""
        return _DESCRIBERS[self.view](self)


def _goal_title(state: DashboardState) -> str:
    return (state.goal or {}).get("title", "")


_DESCRIBERS = {
    DashboardView.IDLE: lambda s: "Choose a goal or create a new one",
    DashboardView.CREATING: lambda s: "Creating a new goal",
    DashboardView.GOAL_SELECTED: lambda s: f"Ready to spark: {_goal_title(s)}",
    DashboardView.SPARK_PRESENTED: lambda s: f"Next spark: {(s.spark or {}).get('title', '')}",
    DashboardView.COMPLETED: lambda s: f"{len(s.completed_sparks)} sparks completed for {_goal_title(s)}",
    DashboardView.PROGRESS: lambda s: f"Progress on {_goal_title(s)}: {len(s.completed_sparks)} sparks",
}
