"""
PostgreSQL Database Module for Spark.

Handles:
- Goals owned by users
- Sparks generated for goals
- Spark completions and the goal progress counter
- User profiles
"""

from .connection import Database, normalize_database_url
from .models import (
    Base,
    GoalDB,
    SparkDB,
    SparkCompletionDB,
    ProfileDB,
    GoalStatusEnum,
    PremiumTierEnum,
)

__all__ = [
    "Database",
    "normalize_database_url",
    "Base",
    "GoalDB",
    "SparkDB",
    "SparkCompletionDB",
    "ProfileDB",
    "GoalStatusEnum",
    "PremiumTierEnum",
]
