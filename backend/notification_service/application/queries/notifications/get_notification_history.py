"""Get Notification History Query."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Query, QueryHandler
from notification_service.application.common.validation import require_page
from notification_service.config.settings import Config
from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.entities.paged_result import PagedResult
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetNotificationHistoryQuery(Query[PagedResult[NotificationRecord]]):
    user_id: UserId
    page: int = 1
    size: int = Config.NOTIFICATION_PAGE_SIZE_DEFAULT

    def __post_init__(self):
        require_page(self.page, self.size)


class GetNotificationHistoryHandler(QueryHandler[PagedResult[NotificationRecord]]):
    """
    Newest-first page of a user's history.

    With accurate_total_count disabled, total_count reports the number of
    items on the returned page, which is what older clients were built against.
    """

    def __init__(
        self,
        notification_repository: NotificationHistoryRepository,
        accurate_total_count: bool = Config.ACCURATE_TOTAL_COUNT,
    ):
        self._notification_repository = notification_repository
        self._accurate_total_count = accurate_total_count

    async def execute(
        self, query: GetNotificationHistoryQuery
    ) -> PagedResult[NotificationRecord]:
        items = await self._notification_repository.get_by_user(
            query.user_id, query.page, query.size
        )
        if self._accurate_total_count:
            total_count = await self._notification_repository.count_by_user(
                query.user_id
            )
        else:
            total_count = len(items)

        return PagedResult(
            items=items, page=query.page, size=query.size, total_count=total_count
        )
