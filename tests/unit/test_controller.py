"""
Tests for the session controller.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from spark.client.api import SparkApiError
from spark.client.controller import NoActiveSpark, SparkSessionController

GOAL = {"id": "g1", "title": "Learn guitar", "description": None}


@pytest.fixture
def api():
    api = Mock()
    api.get_goal = AsyncMock(return_value=GOAL)
    api.generate_spark = AsyncMock(return_value={"id": "s1", "title": "Tune"})
    api.complete_spark = AsyncMock(return_value={"id": "c1", "spark_id": "s1"})
    return api


@pytest.fixture
def controller(api):
    return SparkSessionController(api)


@pytest.mark.asyncio
async def test_enter_goal_starts_session(controller, api):
    goal = await controller.enter_goal("g1")

    assert goal == GOAL
    assert controller.store.is_active
    assert controller.store.session_id is not None
    api.get_goal.assert_awaited_once_with("g1")


@pytest.mark.asyncio
async def test_generate_and_complete_loop(controller, api):
    await controller.enter_goal("g1")

    spark = await controller.generate_next()
    assert controller.store.current_spark == spark

    await controller.complete_current(notes="easy")

    api.generate_spark.assert_awaited_once_with(
        goal_id="g1", goal_title="Learn guitar", goal_description=None
    )
    api.complete_spark.assert_awaited_once_with(
        spark_id="s1",
        goal_id="g1",
        session_id=controller.store.session_id,
        notes="easy",
    )
    assert controller.store.chain_length == 1
    assert controller.store.current_spark is None
    assert controller.summary()["chain_length"] == 1


@pytest.mark.asyncio
async def test_generate_before_enter(controller):
    with pytest.raises(RuntimeError):
        await controller.generate_next()


@pytest.mark.asyncio
async def test_complete_without_spark(controller):
    await controller.enter_goal("g1")

    with pytest.raises(NoActiveSpark):
        await controller.complete_current()


@pytest.mark.asyncio
async def test_failed_completion_leaves_state(controller, api):
    await controller.enter_goal("g1")
    await controller.generate_next()
    api.complete_spark.side_effect = SparkApiError(400, "Spark already completed")

    with pytest.raises(SparkApiError):
        await controller.complete_current()

    assert controller.store.chain_length == 0
    assert controller.store.current_spark == {"id": "s1", "title": "Tune"}


@pytest.mark.asyncio
async def test_failed_goal_load_does_not_start_session(controller, api):
    api.get_goal.side_effect = SparkApiError(404, "Goal not found")

    with pytest.raises(SparkApiError):
        await controller.enter_goal("missing")

    assert not controller.store.is_active
    assert controller.goal is None


@pytest.mark.asyncio
async def test_end_then_leave(controller):
    await controller.enter_goal("g1")

    controller.end()
    assert not controller.store.is_active
    assert controller.store.session_id is not None

    controller.leave()
    assert controller.store.session_id is None
    assert controller.summary() == {"goal": None, "chain_length": 0, "completed_sparks": []}
