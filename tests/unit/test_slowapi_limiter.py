"""Tests for slowapi rate limiting."""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from unittest.mock import Mock

from spark.middleware.slowapi_limiter import (
    create_limiter,
    get_request_identifier,
    setup_rate_limiting,
)


def test_create_limiter_with_redis():
    """Test limiter creation with Redis backend."""
    limiter = create_limiter("redis://localhost:6379")
    assert limiter is not None
    assert limiter.enabled == True


def test_create_limiter_without_redis():
    """Test limiter creation without Redis (in-memory)."""
    limiter = create_limiter(None)
    assert limiter is not None
    assert limiter.enabled == True


def test_create_limiter_disabled():
    limiter = create_limiter(None, enabled=False)
    assert limiter.enabled == False


def test_limiter_has_default_limits():
    """Test that limiter has default limits configured."""
    limiter = create_limiter(None)
    # Slowapi stores limits in _default_limits
    assert hasattr(limiter, '_default_limits')
    assert len(limiter._default_limits) > 0


def test_setup_rate_limiting():
    """Test setup_rate_limiting configures app correctly."""
    app = FastAPI()
    limiter = setup_rate_limiting(app)

    assert app.state.limiter == limiter
    assert RateLimitExceeded in app.exception_handlers
    assert any(m.cls is SlowAPIMiddleware for m in app.user_middleware)


def test_identifier_uses_bearer_token():
    request = Mock()
    request.headers = {"Authorization": "Bearer " + "a" * 40 + "b" * 32}

    assert get_request_identifier(request) == "token:" + "b" * 32


def test_identifier_falls_back_to_ip():
    request = Mock()
    request.headers = {}
    request.client.host = "203.0.113.7"

    assert get_request_identifier(request) == "203.0.113.7"


@pytest.mark.parametrize("header", ["Basic abc", "Bearer ", "token"])
def test_identifier_ignores_non_bearer(header):
    request = Mock()
    request.headers = {"Authorization": header}
    request.client.host = "203.0.113.7"

    assert get_request_identifier(request) == "203.0.113.7"


def test_default_limit_applies_to_undecorated_routes():
    """Routes without their own limit still get RATE_LIMIT_DEFAULT."""
    app = FastAPI()
    setup_rate_limiting(app, create_limiter(None, default_limit="2/minute"))

    @app.get("/goals")
    async def list_goals():
        return {"goals": []}

    client = TestClient(app)
    statuses = [client.get("/goals").status_code for _ in range(4)]

    assert statuses == [200, 200, 429, 429]
    assert "error" in client.get("/goals").json()


def test_disabled_limiter_lets_everything_through():
    app = FastAPI()
    setup_rate_limiting(app, create_limiter(None, enabled=False, default_limit="1/minute"))

    @app.get("/goals")
    async def list_goals():
        return {"goals": []}

    client = TestClient(app)
    assert [client.get("/goals").status_code for _ in range(3)] == [200, 200, 200]
