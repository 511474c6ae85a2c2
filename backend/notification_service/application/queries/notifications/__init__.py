"""Notification queries."""

from .get_notification_history import (
    GetNotificationHistoryQuery,
    GetNotificationHistoryHandler,
)
from .get_unread_count import (
    GetUnreadNotificationCountQuery,
    GetUnreadNotificationCountHandler,
)
from .get_online_status import (
    GetUserOnlineStatusQuery,
    GetUserOnlineStatusHandler,
    GetUsersOnlineStatusQuery,
    GetUsersOnlineStatusHandler,
)

__all__ = [
    "GetNotificationHistoryQuery",
    "GetNotificationHistoryHandler",
    "GetUnreadNotificationCountQuery",
    "GetUnreadNotificationCountHandler",
    "GetUserOnlineStatusQuery",
    "GetUserOnlineStatusHandler",
    "GetUsersOnlineStatusQuery",
    "GetUsersOnlineStatusHandler",
]
