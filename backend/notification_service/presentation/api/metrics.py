"""
Prometheus Metrics Endpoint for the Notification Service.

DATA FLOW:
    observability/metrics.py         This file                    Observability Stack
    ────────────────────────         ─────────                    ───────────────────
    Define & record metrics ──────►  /metrics endpoint ──────────► Prometheus ──► Grafana
"""

from fastapi import APIRouter, Response

from notification_service.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Prometheus metrics in text exposition format."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
