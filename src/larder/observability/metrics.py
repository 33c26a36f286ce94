"""Prometheus metrics for Larder.

Provides metrics collection and exposure:
- HTTP request metrics (latency, count)
- Recipe list cache metrics (hits, misses, errors, evictions)

Usage:
    from larder.observability.metrics import record_cache_hit

    record_cache_hit()
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from prometheus_client import REGISTRY, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CACHE_TYPE = "recipe_list"


@dataclass
class MetricsRegistry:
    """Registry for Prometheus metrics."""

    # HTTP metrics
    http_requests_total: Any = None
    http_request_duration_seconds: Any = None
    http_requests_in_progress: Any = None

    # Cache metrics
    cache_hits_total: Any = None
    cache_misses_total: Any = None
    cache_errors_total: Any = None
    cache_evictions_total: Any = None

    _initialized: bool = field(default=False, repr=False)

    def initialize(self) -> None:
        """Register collectors with the default Prometheus registry."""
        if self._initialized:
            return

        self.http_requests_total = Counter(
            "larder_http_requests_total",
            "Total HTTP requests",
            ["method", "path", "status"],
        )

        self.http_request_duration_seconds = Histogram(
            "larder_http_request_duration_seconds",
            "HTTP request latency in seconds",
            ["method", "path"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
        )

        self.http_requests_in_progress = Gauge(
            "larder_http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
        )

        self.cache_hits_total = Counter(
            "larder_cache_hits_total",
            "Cache hits",
            ["cache_type"],
        )

        self.cache_misses_total = Counter(
            "larder_cache_misses_total",
            "Cache misses",
            ["cache_type"],
        )

        self.cache_errors_total = Counter(
            "larder_cache_errors_total",
            "Cache operations that failed and were bypassed",
            ["cache_type", "operation"],
        )

        self.cache_evictions_total = Counter(
            "larder_cache_evictions_total",
            "Cache keys removed by invalidation",
            ["cache_type"],
        )

        self._initialized = True
        logger.info("Prometheus metrics initialized")

    def generate_latest(self) -> bytes:
        """Generate Prometheus metrics in exposition format."""
        return generate_latest(REGISTRY)


# Global metrics registry
metrics_registry = MetricsRegistry()


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry.

    Initializes metrics on first access.
    """
    if not metrics_registry._initialized:
        metrics_registry.initialize()
    return metrics_registry


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware for HTTP request metrics.

    Records:
    - Request count by method, path, status
    - Request duration histogram
    - Requests in progress gauge
    """

    def __init__(self, app: "ASGIApp") -> None:
        super().__init__(app)
        self.metrics = get_metrics()

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        """Record metrics for HTTP requests."""
        if request.url.path in ("/health", "/metrics"):
            return await call_next(request)

        method = request.method
        path = self._normalize_path(request.url.path)

        self.metrics.http_requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start_time
            self.metrics.http_requests_total.labels(
                method=method,
                path=path,
                status=status_code,
            ).inc()
            self.metrics.http_request_duration_seconds.labels(
                method=method,
                path=path,
            ).observe(duration)
            self.metrics.http_requests_in_progress.labels(method=method).dec()

    def _normalize_path(self, path: str) -> str:
        """Replace recipe identifiers with a placeholder.

        Examples:
            /recipes -> /recipes
            /recipes/0b6f...e1 -> /recipes/{id}
        """
        parts = path.strip("/").split("/")
        if len(parts) >= 2 and parts[0] == "recipes":
            return "/recipes/{id}"
        return path


def record_cache_hit(cache_type: str = CACHE_TYPE) -> None:
    """Record cache hit."""
    get_metrics().cache_hits_total.labels(cache_type=cache_type).inc()


def record_cache_miss(cache_type: str = CACHE_TYPE) -> None:
    """Record cache miss."""
    get_metrics().cache_misses_total.labels(cache_type=cache_type).inc()


def record_cache_error(operation: str, cache_type: str = CACHE_TYPE) -> None:
    """Record a cache operation that failed and was bypassed.

    Args:
        operation: Cache operation (get, set, delete)
        cache_type: Logical cache the operation targeted
    """
    get_metrics().cache_errors_total.labels(cache_type=cache_type, operation=operation).inc()


def record_cache_evictions(count: int, cache_type: str = CACHE_TYPE) -> None:
    """Record keys removed by an invalidation pass."""
    if count:
        get_metrics().cache_evictions_total.labels(cache_type=cache_type).inc(count)
