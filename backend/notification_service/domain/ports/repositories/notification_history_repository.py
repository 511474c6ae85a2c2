"""
Notification History Repository Port - Interface for notification persistence.
Implementation: notification_service/infrastructure/persistence/prisma_notification_history_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.value_objects.user_id import UserId


class NotificationHistoryRepository(ABC):
    @abstractmethod
    async def create(self, record: NotificationRecord) -> int:
        """Insert an unread record and return its generated id."""
        ...

    @abstractmethod
    async def get_by_id(self, notification_id: int) -> Optional[NotificationRecord]: ...

    @abstractmethod
    async def get_by_user(
        self, user_id: UserId, page: int = 1, size: int = 20
    ) -> list[NotificationRecord]:
        """Newest first; page is 1-based."""
        ...

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int: ...

    @abstractmethod
    async def get_unread_count(self, user_id: UserId) -> int: ...

    @abstractmethod
    async def mark_as_read(self, notification_id: int, user_id: UserId) -> bool:
        """Owner-scoped. Returns False (and changes nothing) for another user's record."""
        ...

    @abstractmethod
    async def mark_all_as_read(self, user_id: UserId) -> int: ...

    @abstractmethod
    async def delete(self, notification_id: int, user_id: UserId) -> bool: ...
