from .api_validation import (
    GoalStatus,
    GoalCreate,
    GoalUpdate,
    SparkGenerateRequest,
    SparkCompleteRequest,
)

__all__ = [
    "GoalStatus",
    "GoalCreate",
    "GoalUpdate",
    "SparkGenerateRequest",
    "SparkCompleteRequest",
]
