"""Metrics infrastructure package."""

from social_connections.infrastructure.metrics.prometheus_metrics import (
    STORE_OPERATIONS_TOTAL,
    STORE_OPERATION_DURATION,
    SYSTEM_INFO,
    track_store_operation,
    update_system_info,
)

__all__ = [
    "STORE_OPERATIONS_TOTAL",
    "STORE_OPERATION_DURATION",
    "SYSTEM_INFO",
    "track_store_operation",
    "update_system_info",
]
