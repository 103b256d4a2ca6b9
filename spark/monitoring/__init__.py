"""
Monitoring module for Prometheus metrics.
"""
from .prometheus import (
    http_requests_total,
    http_request_duration,
    goals_created_total,
    sparks_generated_total,
    sparks_completed_total,
    ai_requests_total,
    ai_request_duration,
    errors_total,
)

from .middleware import metrics_middleware, normalize_endpoint

__all__ = [
    'http_requests_total',
    'http_request_duration',
    'goals_created_total',
    'sparks_generated_total',
    'sparks_completed_total',
    'ai_requests_total',
    'ai_request_duration',
    'errors_total',
    'metrics_middleware',
    'normalize_endpoint',
]
