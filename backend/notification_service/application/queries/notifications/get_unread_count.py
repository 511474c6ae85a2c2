"""Get Unread Notification Count Query."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Query, QueryHandler
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetUnreadNotificationCountQuery(Query[int]):
    user_id: UserId


class GetUnreadNotificationCountHandler(QueryHandler[int]):
    def __init__(self, notification_repository: NotificationHistoryRepository):
        self._notification_repository = notification_repository

    async def execute(self, query: GetUnreadNotificationCountQuery) -> int:
        return await self._notification_repository.get_unread_count(query.user_id)
