"""
Tests for the async Spark API client.
"""

import json

import httpx
import pytest

from spark.client.api import SparkApiClient, SparkApiError


def make_client(handler) -> SparkApiClient:
    http = httpx.AsyncClient(
        base_url="https://spark.example.com",
        transport=httpx.MockTransport(handler),
    )
    return SparkApiClient(http)


class Recorder:
    """Mock transport handler that records requests and returns a fixed reply."""

    def __init__(self, status=200, payload=None, **kwargs):
        self.status = status
        self.payload = payload if payload is not None else {}
        self.kwargs = kwargs
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if "content" in self.kwargs:
            return httpx.Response(self.status, **self.kwargs)
        return httpx.Response(self.status, json=self.payload)

    @property
    def body(self):
        return json.loads(self.requests[-1].content)


@pytest.mark.asyncio
async def test_list_goals():
    handler = Recorder(payload={"goals": [{"id": "g1"}]})

    goals = await make_client(handler).list_goals()

    assert goals == [{"id": "g1"}]
    assert handler.requests[0].method == "GET"
    assert handler.requests[0].url.path == "/goals"


@pytest.mark.asyncio
async def test_create_goal():
    handler = Recorder(status=201, payload={"goal": {"id": "g1", "title": "Run"}})

    goal = await make_client(handler).create_goal("Run", "A 5k")

    assert goal["id"] == "g1"
    assert handler.body == {"title": "Run", "description": "A 5k"}


@pytest.mark.asyncio
async def test_update_goal_sends_only_changes():
    handler = Recorder(payload={"goal": {"id": "g1", "status": "paused"}})

    await make_client(handler).update_goal("g1", status="paused")

    assert handler.requests[0].method == "PATCH"
    assert handler.requests[0].url.path == "/goals/g1"
    assert handler.body == {"status": "paused"}


@pytest.mark.asyncio
async def test_delete_goal():
    handler = Recorder(payload={"success": True})

    assert await make_client(handler).delete_goal("g1") is True
    assert handler.requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_generate_spark_uses_camel_case_body():
    handler = Recorder(payload={"spark": {"id": "s1"}})

    spark = await make_client(handler).generate_spark("g1", "Learn guitar")

    assert spark == {"id": "s1"}
    assert handler.requests[0].url.path == "/sparks/generate"
    assert handler.body == {"goalId": "g1", "goalTitle": "Learn guitar", "goalDescription": None}


@pytest.mark.asyncio
async def test_complete_spark():
    handler = Recorder(payload={"completion": {"id": "c1"}})

    completion = await make_client(handler).complete_spark("s1", "g1", "sess-1", notes="done")

    assert completion == {"id": "c1"}
    assert handler.body == {"sparkId": "s1", "goalId": "g1", "sessionId": "sess-1", "notes": "done"}


@pytest.mark.asyncio
async def test_completed_sparks_and_list_sparks():
    handler = Recorder(payload={"goal": {"id": "g1"}, "completedSparks": [], "sparks": [{"id": "s1"}]})
    client = make_client(handler)

    progress = await client.get_completed_sparks("g1")
    sparks = await client.list_sparks("g1")

    assert progress["completedSparks"] == []
    assert sparks == [{"id": "s1"}]
    assert [r.url.path for r in handler.requests] == ["/goals/g1/completed-sparks", "/sparks/g1"]


@pytest.mark.asyncio
async def test_error_envelope_raises():
    handler = Recorder(status=404, payload={"error": "Goal not found"})

    with pytest.raises(SparkApiError) as exc_info:
        await make_client(handler).get_goal("missing")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Goal not found"


@pytest.mark.asyncio
async def test_error_without_envelope_uses_reason():
    handler = Recorder(status=500, payload={"detail": "oops"})

    with pytest.raises(SparkApiError) as exc_info:
        await make_client(handler).get_profile()

    assert exc_info.value.message == "Internal Server Error"


@pytest.mark.asyncio
async def test_non_json_response():
    handler = Recorder(
        status=502,
        content=b"<html>Bad gateway</html>",
        headers={"content-type": "text/html"},
    )

    with pytest.raises(SparkApiError) as exc_info:
        await make_client(handler).list_goals()

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Invalid response from server"
