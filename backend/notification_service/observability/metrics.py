"""
Prometheus Metrics for the Notification Service.

DATA FLOW:
    This file                  presentation/api/metrics.py         Observability Stack
    ─────────                  ────────────────────────────         ───────────────────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus ──► Grafana

METRIC TYPES:
    - Gauge: Value goes up/down (open realtime connections)
    - Counter: Value only goes up (notifications dispatched, errors)
    - Histogram: Distribution (broadcast fan-out size)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
ACTIVE_CONNECTIONS = Gauge(
    "notification_active_connections",
    "Number of realtime connections open on this instance",
)

NOTIFICATIONS_DISPATCHED = Counter(
    "notification_dispatched_total",
    "Notifications dispatched by type and delivery path",
    ["type", "delivery"],
)

BROADCAST_RECIPIENTS = Histogram(
    "notification_broadcast_recipients",
    "Number of target users per system broadcast",
    buckets=[1, 5, 10, 50, 100, 250, 500, 1000],
)

ERRORS_TOTAL = Counter(
    "notification_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class Delivery:
    """Delivery labels for notification_dispatched_total."""

    PUSHED = "pushed"
    STORED = "stored"
    DROPPED = "dropped"


class MetricsErrorType:
    """Error type labels for notification_errors_total metric."""

    PRESENCE_FAILED = "presence_failed"
    PUSH_FAILED = "push_failed"
    PERSIST_FAILED = "persist_failed"
    CLEANUP_FAILED = "cleanup_failed"
    AUTH_FAILED = "auth_failed"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def increment_active_connections():
    """Call when a hub session reaches CONNECTED."""
    ACTIVE_CONNECTIONS.inc()


def decrement_active_connections():
    """Call when a hub session reaches DISCONNECTED."""
    ACTIVE_CONNECTIONS.dec()


def increment_dispatched(type: str, delivery: str):
    NOTIFICATIONS_DISPATCHED.labels(type=type, delivery=delivery).inc()


def observe_broadcast_recipients(count: int):
    BROADCAST_RECIPIENTS.observe(count)


def increment_error(error_type: str):
    """
    Call to record an error occurrence.

    Integration points:
        - application/services/dispatcher.py: push_failed, persist_failed
        - application/services/cleanup_worker.py: cleanup_failed
        - presentation/realtime/chat_hub.py: auth_failed
    """
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


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
