"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from notification_service.domain.entities.connection import Connection
from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.entities.paged_result import PagedResult
from notification_service.domain.entities.user import UserSummary

__all__ = [
    "Connection",
    "NotificationRecord",
    "PagedResult",
    "UserSummary",
]
