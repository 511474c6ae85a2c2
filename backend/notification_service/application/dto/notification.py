"""Notification DTOs for API request/response."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.entities.paged_result import PagedResult


class NotificationDTO(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    content: str
    is_read: bool
    created_at: datetime
    read_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: NotificationRecord) -> "NotificationDTO":
        return cls(
            id=record.id,
            user_id=record.user_id.value,
            type=record.type.value,
            title=record.title,
            content=record.content,
            is_read=record.is_read,
            created_at=record.created_at,
            read_at=record.read_at,
        )


class PagedNotificationsDTO(BaseModel):
    items: list[NotificationDTO]
    page: int
    size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @classmethod
    def from_page(
        cls, page: PagedResult[NotificationRecord]
    ) -> "PagedNotificationsDTO":
        return cls(
            items=[NotificationDTO.from_record(record) for record in page.items],
            page=page.page,
            size=page.size,
            total_count=page.total_count,
            total_pages=page.total_pages,
            has_previous=page.has_previous,
            has_next=page.has_next,
        )
