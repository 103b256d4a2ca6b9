"""
Tests for access token verification against the identity provider.
"""

import httpx
import pytest

from config import Settings
from spark.auth.identity import AuthenticationError, AuthUser, IdentityProvider


@pytest.fixture
def config():
    return Settings(auth_url="https://auth.example.com/auth/v1/", auth_api_key="anon-key")


def make_provider(config, handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return IdentityProvider(config, http_client=client)


@pytest.mark.asyncio
async def test_valid_token(config):
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"id": "user-1", "email": "sam@example.com"})

    user = await make_provider(config, handler).get_user("tok-1")

    assert user == AuthUser(id="user-1", email="sam@example.com")
    assert seen["url"] == "https://auth.example.com/auth/v1/user"
    assert seen["headers"]["apikey"] == "anon-key"
    assert seen["headers"]["authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token(config, token):
    def handler(request):
        raise AssertionError("provider should not be called")

    with pytest.raises(AuthenticationError, match="Missing access token"):
        await make_provider(config, handler).get_user(token)


@pytest.mark.asyncio
async def test_provider_not_configured():
    provider = IdentityProvider(Settings(auth_url=""))

    with pytest.raises(AuthenticationError, match="not configured"):
        await provider.get_user("tok-1")


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403, 500])
async def test_rejected_token(config, status):
    provider = make_provider(config, lambda request: httpx.Response(status, json={"msg": "bad jwt"}))

    with pytest.raises(AuthenticationError, match="Invalid access token"):
        await provider.get_user("tok-1")


@pytest.mark.asyncio
async def test_provider_unreachable(config):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthenticationError, match="unavailable"):
        await make_provider(config, handler).get_user("tok-1")


@pytest.mark.asyncio
async def test_response_without_id(config):
    provider = make_provider(config, lambda request: httpx.Response(200, json={"email": "x@y.z"}))

    with pytest.raises(AuthenticationError, match="no user"):
        await provider.get_user("tok-1")


@pytest.mark.asyncio
async def test_non_json_success_response(config):
    provider = make_provider(
        config,
        lambda request: httpx.Response(200, content=b"<html>ok</html>", headers={"content-type": "text/html"}),
    )

    with pytest.raises(AuthenticationError, match="invalid response"):
        await provider.get_user("tok-1")
