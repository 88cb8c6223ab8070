"""
Prometheus Metrics

Metrics for document store traffic. The embedding application
exposes them through its own /metrics endpoint.

ARCHITECTURE: Only increment/observe; never block on metrics operations.
"""

import time
from functools import wraps
from typing import Callable

from prometheus_client import Counter, Histogram, Info

from social_connections import __version__

# =============================================================================
# STORE METRICS
# =============================================================================

STORE_OPERATIONS_TOTAL = Counter(
    "social_store_operations_total",
    "Document store operations by outcome",
    ["operation", "status"],  # success, error
)

STORE_OPERATION_DURATION = Histogram(
    "social_store_operation_duration_seconds",
    "Document store operation latency",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "social_connections",
    "Connection store information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",
})


def track_store_operation(operation: str) -> Callable:
    """Decorator recording outcome and latency of an async store call."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                STORE_OPERATIONS_TOTAL.labels(operation=operation, status="success").inc()
                return result
            except Exception:
                STORE_OPERATIONS_TOTAL.labels(operation=operation, status="error").inc()
                raise
            finally:
                STORE_OPERATION_DURATION.labels(operation=operation).observe(
                    time.perf_counter() - start_time
                )
        return wrapper
    return decorator


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
