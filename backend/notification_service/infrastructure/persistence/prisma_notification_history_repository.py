"""
Prisma Notification History Repository Implementation.

Prisma NotificationHistory Model (from backend/prisma/schema.prisma):
    model NotificationHistory {
        id         Int       @id @default(autoincrement())
        user_id    Int
        type       String
        title      String
        content    String
        is_read    Boolean   @default(false)
        created_at DateTime  @default(now())
        read_at    DateTime?
        @@map("notification_history")
    }

Mapping:
- Prisma: user_id (int) ←→ Domain: user_id (UserId)
- Prisma: type (str)    ←→ Domain: type (NotificationType)
- Other fields map directly

Error handling:
- Reads log and degrade (empty list, 0, None)
- Writes log and re-raise, so the calling handler can report failure
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, TYPE_CHECKING

from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.ports.repositories.notification_history_repository import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class PrismaNotificationHistoryRepository(NotificationHistoryRepository):
    """
    Prisma implementation of NotificationHistoryRepository.

    Handles persistence of NotificationRecord entities to PostgreSQL via Prisma.
    """

    def __init__(self, prisma: "Prisma"):
        """
        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    @property
    def _table(self) -> Any:
        return self._prisma.notificationhistory

    def _to_entity(self, record: Any) -> NotificationRecord:
        return NotificationRecord(
            id=record.id,
            user_id=UserId(record.user_id),
            type=NotificationType.parse(record.type),
            title=record.title,
            content=record.content,
            is_read=record.is_read,
            created_at=record.created_at,
            read_at=record.read_at,
        )

    async def create(self, record: NotificationRecord) -> int:
        try:
            created = await self._table.create(
                data={
                    "user_id": record.user_id.value,
                    "type": record.type.value,
                    "title": record.title,
                    "content": record.content,
                    "is_read": False,
                    "created_at": record.created_at,
                }
            )
            record.id = created.id
            logger.info(
                f"Created notification {created.id} for user {record.user_id}"
            )
            return created.id
        except Exception as e:
            logger.error(f"Failed to create notification for user {record.user_id}: {e}")
            raise

    async def get_by_id(self, notification_id: int) -> Optional[NotificationRecord]:
        try:
            record = await self._table.find_unique(where={"id": notification_id})
            return self._to_entity(record) if record else None
        except Exception as e:
            logger.error(f"Failed to get notification {notification_id}: {e}")
            return None

    async def get_by_user(
        self, user_id: UserId, page: int = 1, size: int = 20
    ) -> list[NotificationRecord]:
        try:
            records = await self._table.find_many(
                where={"user_id": user_id.value},
                order={"created_at": "desc"},
                skip=(page - 1) * size,
                take=size,
            )
            return [self._to_entity(record) for record in records]
        except Exception as e:
            logger.error(f"Failed to get notifications for user {user_id}: {e}")
            return []

    async def count_by_user(self, user_id: UserId) -> int:
        try:
            return await self._table.count(where={"user_id": user_id.value})
        except Exception as e:
            logger.error(f"Failed to count notifications for user {user_id}: {e}")
            return 0

    async def get_unread_count(self, user_id: UserId) -> int:
        try:
            return await self._table.count(
                where={"user_id": user_id.value, "is_read": False}
            )
        except Exception as e:
            logger.error(f"Failed to get unread count for user {user_id}: {e}")
            return 0

    async def mark_as_read(self, notification_id: int, user_id: UserId) -> bool:
        try:
            updated = await self._table.update_many(
                where={"id": notification_id, "user_id": user_id.value},
                data={"is_read": True, "read_at": datetime.now(timezone.utc)},
            )
            logger.info(
                f"Marked notification {notification_id} as read for user {user_id} "
                f"(rows={updated})"
            )
            return updated > 0
        except Exception as e:
            logger.error(
                f"Failed to mark notification {notification_id} as read "
                f"for user {user_id}: {e}"
            )
            raise

    async def mark_all_as_read(self, user_id: UserId) -> int:
        try:
            updated = await self._table.update_many(
                where={"user_id": user_id.value, "is_read": False},
                data={"is_read": True, "read_at": datetime.now(timezone.utc)},
            )
            logger.info(f"Marked {updated} notifications as read for user {user_id}")
            return updated
        except Exception as e:
            logger.error(f"Failed to mark all notifications as read for user {user_id}: {e}")
            raise

    async def delete(self, notification_id: int, user_id: UserId) -> bool:
        try:
            deleted = await self._table.delete_many(
                where={"id": notification_id, "user_id": user_id.value}
            )
            return deleted > 0
        except Exception as e:
            logger.error(f"Failed to delete notification {notification_id}: {e}")
            raise
