"""
Repository classes for database operations.

Each repository handles CRUD and queries for its entity type and is
constructed with the application's Database instance.
"""

from .goals import GoalRepository, increment_sparks_statement
from .sparks import SparkRepository
from .completions import CompletionRepository
from .profiles import ProfileRepository

__all__ = [
    "GoalRepository",
    "increment_sparks_statement",
    "SparkRepository",
    "CompletionRepository",
    "ProfileRepository",
]
