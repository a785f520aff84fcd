"""
Prometheus metrics for Catalog Service.

Tracks HTTP traffic and cache-aside behaviour (hits, misses, failures,
invalidations).
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "catalog_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Cache metrics
catalog_cache_hits_total = Counter(
    "catalog_cache_hits_total", "Total cache hits", ["operation"]
)

catalog_cache_misses_total = Counter(
    "catalog_cache_misses_total", "Total cache misses", ["operation"]
)

catalog_cache_errors_total = Counter(
    "catalog_cache_errors_total",
    "Cache operations that failed and were absorbed",
    ["action"],
)

catalog_cache_invalidations_total = Counter(
    "catalog_cache_invalidations_total", "Total cache keys invalidated", ["reason"]
)


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_cache_hit(operation: str):
    """Track cache hits."""
    catalog_cache_hits_total.labels(operation=operation).inc()


def track_cache_miss(operation: str):
    """Track cache misses."""
    catalog_cache_misses_total.labels(operation=operation).inc()


def track_cache_error(action: str):
    """Track absorbed cache failures (get, set, delete, decode)."""
    catalog_cache_errors_total.labels(action=action).inc()


def track_cache_invalidation(reason: str, count: int = 1):
    """Track invalidated keys."""
    catalog_cache_invalidations_total.labels(reason=reason).inc(count)


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
