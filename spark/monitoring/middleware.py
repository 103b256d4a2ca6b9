"""
Metrics collection middleware for HTTP requests and response times.
"""
import re
import time
import logging
from typing import Optional

from fastapi import Request
from .prometheus import (
    http_requests_total,
    http_request_duration,
    errors_total,
)

logger = logging.getLogger(__name__)

_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


async def metrics_middleware(request: Request, call_next):
    """
    Collect HTTP metrics for all requests.

    Tracks:
    - Request counts by method, endpoint, status code
    - Request duration by method, endpoint
    - Error counts for 4xx/5xx responses and unhandled exceptions
    """
    start_time = time.time()
    normalized_path = normalize_endpoint(request.url.path)

    try:
        response = await call_next(request)
    except Exception as e:
        record_error(exception=e)
        raise

    duration = time.time() - start_time

    http_requests_total.labels(
        method=request.method,
        endpoint=normalized_path,
        status=response.status_code
    ).inc()

    http_request_duration.labels(
        method=request.method,
        endpoint=normalized_path
    ).observe(duration)

    if response.status_code >= 400:
        record_error(status_code=response.status_code)

    return response


def record_error(exception: Optional[Exception] = None, status_code: Optional[int] = None):
    """Record an error in Prometheus metrics."""
    error_type = "http_error"
    severity = "unknown"

    if exception:
        error_type = type(exception).__name__
        severity = "critical"
    elif status_code:
        if 400 <= status_code < 500:
            error_type = "http_4xx"
            severity = "warning"
        elif 500 <= status_code < 600:
            error_type = "http_5xx"
            severity = "critical"

    errors_total.labels(type=error_type, severity=severity).inc()


def normalize_endpoint(path: str) -> str:
    """
    Normalize endpoint paths to reduce cardinality.

    Examples:
    - /goals/3f2b...-.../completed-sparks -> /goals/{id}/completed-sparks
    - /sparks/3f2b...-... -> /sparks/{id}
    """
    normalized = []
    for part in path.split('/'):
        if _UUID.match(part) or (part.isdigit() and len(part) > 3):
            normalized.append('{id}')
        else:
            normalized.append(part)

    return '/'.join(normalized)
