"""Observability package for the notification service."""

from notification_service.observability.metrics import (
    increment_active_connections,
    decrement_active_connections,
    increment_dispatched,
    observe_broadcast_recipients,
    increment_error,
    get_metrics_content,
    Delivery,
    MetricsErrorType,
)

__all__ = [
    "increment_active_connections",
    "decrement_active_connections",
    "increment_dispatched",
    "observe_broadcast_recipients",
    "increment_error",
    "get_metrics_content",
    "Delivery",
    "MetricsErrorType",
]
