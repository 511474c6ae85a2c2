"""Application services: presence-aware dispatch and connection cleanup."""

from notification_service.application.services.dispatcher import (
    NotificationDispatcher,
)
from notification_service.application.services.cleanup_worker import (
    ConnectionCleanupWorker,
)

__all__ = [
    "NotificationDispatcher",
    "ConnectionCleanupWorker",
]
