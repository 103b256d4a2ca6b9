"""
Goal and spark API routes.

Every route authenticates the caller first and only touches rows the caller
owns; another user's goal is reported as not found.
"""

import logging

from fastapi import APIRouter, Depends, Request

from config import settings
from ..ai.generator import SparkGenerator
from ..auth.identity import AuthUser
from ..database.exceptions import (
    DatabaseConstraintError,
    DatabaseError,
    DuplicateCompletionError,
)
from ..database.repositories import (
    CompletionRepository,
    GoalRepository,
    ProfileRepository,
    SparkRepository,
)
from ..middleware.slowapi_limiter import limiter
from ..models.api_validation import (
    GoalCreate,
    GoalUpdate,
    SparkCompleteRequest,
    SparkGenerateRequest,
)
from ..monitoring.prometheus import (
    goals_created_total,
    sparks_completed_total,
    sparks_generated_total,
)
from .dependencies import (
    get_completion_repository,
    get_current_user,
    get_goal_repository,
    get_profile_repository,
    get_spark_generator,
    get_spark_repository,
    json_body,
)
from .errors import Conflict, NotFound, UpstreamFailure
from .serializers import (
    completed_spark_to_dict,
    completion_to_dict,
    goal_to_dict,
    profile_to_dict,
    spark_to_dict,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _require_goal(goals: GoalRepository, goal_id: str, user: AuthUser):
    """Load a goal owned by the caller or raise NotFound."""
    try:
        goal = await goals.get_for_owner(goal_id, user.id)
    except DatabaseError as e:
        logger.error(f"Error fetching goal {goal_id}: {e}")
        raise UpstreamFailure(str(e))

    if goal is None:
        raise NotFound("Goal not found")
    return goal


# ============================================================================
# Goals
# ============================================================================

@router.get("/goals")
async def list_goals(
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
):
    """List the caller's goals, newest first."""
    try:
        rows = await goals.get_all_for_user(user.id)
    except DatabaseError as e:
        logger.error(f"Error fetching goals: {e}")
        raise UpstreamFailure(str(e))

    return {"goals": [goal_to_dict(goal) for goal in rows]}


@router.post("/goals", status_code=201)
async def create_goal(
    body: GoalCreate = Depends(json_body(GoalCreate)),
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
):
    """Create an active goal with no completed sparks."""
    try:
        goal = await goals.create(
            user_id=user.id,
            title=body.title,
            description=body.description,
        )
    except DatabaseError as e:
        logger.error(f"Error creating goal: {e}")
        raise UpstreamFailure(str(e))

    goals_created_total.inc()
    return {"goal": goal_to_dict(goal)}


@router.get("/goals/{goal_id}")
async def get_goal(
    goal_id: str,
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
):
    """Fetch one of the caller's goals."""
    goal = await _require_goal(goals, goal_id, user)
    return {"goal": goal_to_dict(goal)}


@router.patch("/goals/{goal_id}")
async def update_goal(
    goal_id: str,
    body: GoalUpdate = Depends(json_body(GoalUpdate)),
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
):
    """Apply a partial update to title, description and/or status."""
    try:
        goal = await goals.update(goal_id, user.id, body.changes())
    except DatabaseError as e:
        logger.error(f"Error updating goal {goal_id}: {e}")
        raise UpstreamFailure(str(e))

    if goal is None:
        raise NotFound("Goal not found")
    return {"goal": goal_to_dict(goal)}


@router.delete("/goals/{goal_id}")
async def delete_goal(
    goal_id: str,
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
):
    """Hard delete one of the caller's goals."""
    try:
        deleted = await goals.delete(goal_id, user.id)
    except DatabaseError as e:
        logger.error(f"Error deleting goal {goal_id}: {e}")
        raise UpstreamFailure(str(e))

    if not deleted:
        raise NotFound("Goal not found")
    return {"success": True}


@router.get("/goals/{goal_id}/completed-sparks")
async def get_completed_sparks(
    goal_id: str,
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
    completions: CompletionRepository = Depends(get_completion_repository),
):
    """The goal plus the caller's completions for it, newest first."""
    goal = await _require_goal(goals, goal_id, user)

    try:
        rows = await completions.get_completed_for_goal(goal_id, user.id)
    except DatabaseError as e:
        logger.error(f"Error fetching completed sparks for {goal_id}: {e}")
        raise UpstreamFailure(str(e))

    return {
        "goal": goal_to_dict(goal),
        "completedSparks": [completed_spark_to_dict(c) for c in rows],
    }


# ============================================================================
# Sparks
# ============================================================================

@router.post("/sparks/generate")
@limiter.limit(settings.rate_limit_generate)
async def generate_spark(
    request: Request,
    body: SparkGenerateRequest = Depends(json_body(SparkGenerateRequest)),
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
    sparks: SparkRepository = Depends(get_spark_repository),
    generator: SparkGenerator = Depends(get_spark_generator),
):
    """Generate the next spark for a goal and persist it."""
    await _require_goal(goals, body.goal_id, user)

    try:
        previous_sparks = await sparks.get_for_goal(body.goal_id)
    except DatabaseError as e:
        logger.error(f"Error loading sparks for {body.goal_id}: {e}")
        raise UpstreamFailure(str(e))

    suggestion = await generator.generate(
        goal_title=body.goal_title,
        goal_description=body.goal_description,
        previous_sparks=previous_sparks,
    )
    if suggestion.is_fallback:
        logger.warning(f"Using fallback spark for goal {body.goal_id}")

    try:
        spark = await sparks.create_next(
            goal_id=body.goal_id,
            title=suggestion.title,
            description=suggestion.description,
            effort_minutes=suggestion.effort_minutes,
            resource_link=suggestion.resource_link,
            ai_generated=not suggestion.is_fallback,
        )
    except DatabaseConstraintError as e:
        logger.warning(f"Concurrent spark generation for goal {body.goal_id}: {e}")
        raise Conflict(str(e))
    except DatabaseError as e:
        logger.error(f"Error saving spark: {e}")
        raise UpstreamFailure(str(e))

    sparks_generated_total.labels(source=suggestion.source).inc()
    return {"spark": spark_to_dict(spark)}


@router.post("/sparks/complete")
async def complete_spark(
    body: SparkCompleteRequest = Depends(json_body(SparkCompleteRequest)),
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
    sparks: SparkRepository = Depends(get_spark_repository),
    completions: CompletionRepository = Depends(get_completion_repository),
):
    """Mark a spark done and bump the goal's completed count."""
    await _require_goal(goals, body.goal_id, user)

    try:
        spark = await sparks.get_by_id(body.spark_id)
    except DatabaseError as e:
        logger.error(f"Error fetching spark {body.spark_id}: {e}")
        raise UpstreamFailure(str(e))

    if spark is None or spark.goal_id != body.goal_id:
        raise NotFound("Spark not found")

    try:
        completion = await completions.complete(
            user_id=user.id,
            spark_id=body.spark_id,
            goal_id=body.goal_id,
            session_id=body.session_id,
            notes=body.notes,
        )
    except DuplicateCompletionError:
        raise Conflict("Spark already completed")
    except DatabaseConstraintError as e:
        raise Conflict(str(e))
    except DatabaseError as e:
        logger.error(f"Error creating completion: {e}")
        raise UpstreamFailure(str(e))

    sparks_completed_total.inc()
    return {"completion": completion_to_dict(completion)}


@router.get("/sparks/{goal_id}")
async def list_sparks(
    goal_id: str,
    user: AuthUser = Depends(get_current_user),
    goals: GoalRepository = Depends(get_goal_repository),
    sparks: SparkRepository = Depends(get_spark_repository),
):
    """All sparks for one of the caller's goals, by ascending sequence."""
    await _require_goal(goals, goal_id, user)

    try:
        rows = await sparks.get_for_goal(goal_id)
    except DatabaseError as e:
        logger.error(f"Error fetching sparks: {e}")
        raise UpstreamFailure(str(e))

    return {"sparks": [spark_to_dict(spark) for spark in rows]}


# ============================================================================
# Profile
# ============================================================================

@router.get("/profile")
async def get_profile(
    user: AuthUser = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """The caller's profile, created with the free tier on first access."""
    try:
        profile = await profiles.get_or_create(user.id)
    except DatabaseError as e:
        logger.error(f"Error fetching profile for {user.id}: {e}")
        raise UpstreamFailure(str(e))

    return {"profile": profile_to_dict(profile)}
