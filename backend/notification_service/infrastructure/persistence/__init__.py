"""
Persistence Layer - Database implementations.

Contains Prisma repository implementations for domain ports.
"""

from notification_service.infrastructure.persistence.prisma_notification_history_repository import (
    PrismaNotificationHistoryRepository,
)
from notification_service.infrastructure.persistence.prisma_client import (
    connect_prisma,
)

__all__ = [
    "PrismaNotificationHistoryRepository",
    "connect_prisma",
]
