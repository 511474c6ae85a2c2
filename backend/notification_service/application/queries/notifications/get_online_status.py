"""Online status queries, single user and batch."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Query, QueryHandler
from notification_service.application.common.validation import (
    require_broadcast_targets,
)
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetUserOnlineStatusQuery(Query[bool]):
    user_id: UserId


class GetUserOnlineStatusHandler(QueryHandler[bool]):
    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, query: GetUserOnlineStatusQuery) -> bool:
        return await self._dispatcher.is_user_online(query.user_id)


@dataclass(frozen=True)
class GetUsersOnlineStatusQuery(Query[dict[int, bool]]):
    user_ids: tuple[UserId, ...]

    def __post_init__(self):
        require_broadcast_targets(self.user_ids, action="check online status of")


class GetUsersOnlineStatusHandler(QueryHandler[dict[int, bool]]):
    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, query: GetUsersOnlineStatusQuery) -> dict[int, bool]:
        return await self._dispatcher.get_users_online_status(list(query.user_ids))
