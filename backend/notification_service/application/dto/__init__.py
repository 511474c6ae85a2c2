"""DTOs for API request/response."""

from notification_service.application.dto.notification import (
    NotificationDTO,
    PagedNotificationsDTO,
)

__all__ = [
    "NotificationDTO",
    "PagedNotificationsDTO",
]
