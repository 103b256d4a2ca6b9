"""
Slowapi-based rate limiting.

Every route gets the default limit through SlowAPIMiddleware. Spark
generation calls a paid LLM API, so it gets a tighter per-caller limit on
top of that.
"""
from typing import Optional

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import FastAPI, Request
import logging

from config import settings

logger = logging.getLogger(__name__)


def get_request_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Priority:
    1. Access token from the Authorization header (one bucket per signed-in caller)
    2. IP address (fallback)
    """
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return f"token:{token[-32:]}"

    return get_remote_address(request)


def create_limiter(
    redis_url: Optional[str] = None,
    enabled: bool = True,
    default_limit: Optional[str] = None,
) -> Limiter:
    """
    Create and configure slowapi Limiter.

    Args:
        redis_url: Redis connection URL for distributed rate limiting
        enabled: Turn limiting off entirely (tests, local development)
        default_limit: Limit applied to every route, defaults to RATE_LIMIT_DEFAULT
    """
    default_limits = [default_limit or settings.rate_limit_default]

    if redis_url:
        limiter = Limiter(
            key_func=get_request_identifier,
            storage_uri=redis_url,
            default_limits=default_limits,
            enabled=enabled,
        )
        logger.info("Rate limiting configured with Redis backend")
    else:
        limiter = Limiter(
            key_func=get_request_identifier,
            default_limits=default_limits,
            enabled=enabled,
        )
        logger.info("Rate limiting using in-memory storage (not distributed)")

    return limiter


limiter = create_limiter(settings.redis_url or None, enabled=settings.rate_limit_enabled)


def setup_rate_limiting(app: FastAPI, app_limiter: Optional[Limiter] = None) -> Limiter:
    """Attach the limiter, its middleware and its 429 handler to the app."""
    app_limiter = app_limiter or limiter
    app.state.limiter = app_limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info(f"Rate limiting enabled={app_limiter.enabled}")
    return app_limiter
