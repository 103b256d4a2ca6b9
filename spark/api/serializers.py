"""JSON shapes for database rows returned by the API."""

from datetime import datetime
from typing import Any, Dict, Optional

from ..database.models import GoalDB, SparkDB, SparkCompletionDB, ProfileDB


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def goal_to_dict(goal: GoalDB) -> Dict[str, Any]:
    return {
        "id": goal.id,
        "user_id": goal.user_id,
        "created_at": _iso(goal.created_at),
        "updated_at": _iso(goal.updated_at),
        "title": goal.title,
        "description": goal.description,
        "status": goal.status,
        "total_sparks_completed": goal.total_sparks_completed,
    }


def spark_to_dict(spark: SparkDB) -> Dict[str, Any]:
    return {
        "id": spark.id,
        "goal_id": spark.goal_id,
        "created_at": _iso(spark.created_at),
        "title": spark.title,
        "description": spark.description,
        "effort_minutes": spark.effort_minutes,
        "resource_link": spark.resource_link,
        "ai_generated": spark.ai_generated,
        "sequence_number": spark.sequence_number,
    }


def completion_to_dict(completion: SparkCompletionDB) -> Dict[str, Any]:
    return {
        "id": completion.id,
        "user_id": completion.user_id,
        "spark_id": completion.spark_id,
        "goal_id": completion.goal_id,
        "completed_at": _iso(completion.completed_at),
        "session_id": completion.session_id,
        "notes": completion.notes,
    }


def completed_spark_to_dict(completion: SparkCompletionDB) -> Dict[str, Any]:
    """Completion joined with the spark it completed, for progress views."""
    spark = completion.spark
    return {
        "id": completion.id,
        "completed_at": _iso(completion.completed_at),
        "notes": completion.notes,
        "spark": {
            "id": spark.id,
            "title": spark.title,
            "description": spark.description,
            "effort_minutes": spark.effort_minutes,
            "resource_link": spark.resource_link,
        } if spark is not None else None,
    }


def profile_to_dict(profile: ProfileDB) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "created_at": _iso(profile.created_at),
        "updated_at": _iso(profile.updated_at),
        "display_name": profile.display_name,
        "avatar_url": profile.avatar_url,
        "premium_tier": profile.premium_tier,
        "subscription_ends_at": _iso(profile.subscription_ends_at),
    }
