"""Observability for Larder: structured logging and Prometheus metrics."""

from larder.observability.logging import (
    configure_logging,
    correlation_id_var,
    log_unhandled_task_errors,
    request_id_var,
)
from larder.observability.metrics import MetricsMiddleware, get_metrics, metrics_registry

__all__ = [
    # Logging
    "configure_logging",
    "log_unhandled_task_errors",
    "request_id_var",
    "correlation_id_var",
    # Metrics
    "metrics_registry",
    "get_metrics",
    "MetricsMiddleware",
]
