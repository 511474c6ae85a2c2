"""
NotificationRecord Entity - A notification kept in a user's history.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId


@dataclass
class NotificationRecord:
    id: Optional[int]
    user_id: UserId
    type: NotificationType
    title: str
    content: str
    created_at: datetime
    is_read: bool = False
    read_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        user_id: UserId,
        type: NotificationType,
        title: str,
        content: str,
    ) -> NotificationRecord:
        """Factory for a new, unsaved and unread record."""
        return cls(
            id=None,
            user_id=user_id,
            type=type,
            title=title,
            content=content,
            created_at=datetime.now(timezone.utc),
        )

    def belongs_to(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = datetime.now(timezone.utc)
