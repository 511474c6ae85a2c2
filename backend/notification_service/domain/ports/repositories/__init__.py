"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (Prisma, SQLAlchemy, etc.)
"""

from notification_service.domain.ports.repositories.notification_history_repository import (
    NotificationHistoryRepository,
)

__all__ = [
    "NotificationHistoryRepository",
]
