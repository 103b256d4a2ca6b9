"""
Prometheus metrics for monitoring.
"""
from prometheus_client import Counter, Histogram, Info
import logging

logger = logging.getLogger(__name__)

# HTTP Metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration',
    ['method', 'endpoint']
)

# Goal / Spark Metrics
goals_created_total = Counter(
    'goals_created_total',
    'Total goals created'
)

sparks_generated_total = Counter(
    'sparks_generated_total',
    'Total sparks persisted',
    ['source']  # ai, fallback
)

sparks_completed_total = Counter(
    'sparks_completed_total',
    'Total spark completions recorded'
)

# AI Metrics
ai_requests_total = Counter(
    'ai_requests_total',
    'Total AI API requests',
    ['operation', 'status']
)

ai_request_duration = Histogram(
    'ai_request_duration_seconds',
    'AI request duration',
    ['operation']
)

# Error Metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['type', 'severity']
)

# System Info
app_info = Info('app', 'Application information')
app_info.info({
    'name': 'spark',
    'version': '1.0.0'
})
