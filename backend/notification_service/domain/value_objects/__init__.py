"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass or enum)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from notification_service.domain.value_objects.user_id import (
    USER_GROUP_PREFIX,
    UserId,
    group_name_for,
)
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)

__all__ = [
    "UserId",
    "USER_GROUP_PREFIX",
    "group_name_for",
    "ConnectionId",
    "NotificationType",
]
