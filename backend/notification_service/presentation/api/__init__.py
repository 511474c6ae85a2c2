"""
API Routers - FastAPI endpoint definitions.
"""

from notification_service.presentation.api.notifications import (
    router as notifications_router,
)
from notification_service.presentation.api.test_routes import router as test_router
from notification_service.presentation.api.rpc import router as rpc_router
from notification_service.presentation.api.metrics import router as metrics_router

__all__ = [
    "notifications_router",
    "test_router",
    "rpc_router",
    "metrics_router",
]
