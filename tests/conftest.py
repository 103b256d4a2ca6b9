"""
Pytest configuration and shared fixtures.
"""

import os

# Must be set before config.settings is first imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

from spark.auth.identity import AuthUser
from spark.database.models import GoalDB, SparkDB, SparkCompletionDB


USER_ID = "11111111-1111-1111-1111-111111111111"
GOAL_ID = "aaaaaaaa-0000-0000-0000-000000000001"
SPARK_ID = "bbbbbbbb-0000-0000-0000-000000000001"


@pytest.fixture
def mock_database():
    """Mock database with session context manager."""
    db = Mock()
    session = AsyncMock()

    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)

    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.add = Mock()

    db.session = Mock(return_value=session)

    return db, session


@pytest.fixture
def auth_user():
    return AuthUser(id=USER_ID, email="sam@example.com")


@pytest.fixture
def sample_goal():
    """A goal owned by USER_ID."""
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    return GoalDB(
        id=GOAL_ID,
        user_id=USER_ID,
        title="Learn to play guitar",
        description="Acoustic, mostly chords",
        status="active",
        total_sparks_completed=0,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_spark():
    return SparkDB(
        id=SPARK_ID,
        goal_id=GOAL_ID,
        title="Watch a 3-minute tuning video",
        description="Learn how to tune by ear",
        effort_minutes=3,
        resource_link=None,
        ai_generated=True,
        sequence_number=1,
        created_at=datetime(2026, 3, 1, 12, 5, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_completion(sample_spark):
    completion = SparkCompletionDB(
        id="cccccccc-0000-0000-0000-000000000001",
        user_id=USER_ID,
        spark_id=SPARK_ID,
        goal_id=GOAL_ID,
        session_id="dddddddd-0000-0000-0000-000000000001",
        notes=None,
        completed_at=datetime(2026, 3, 1, 12, 10, tzinfo=timezone.utc),
    )
    completion.spark = sample_spark
    return completion
