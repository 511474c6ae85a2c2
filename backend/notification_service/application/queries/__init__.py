"""
QUERIES - Read operations (CQRS)

Queries retrieve data without modifying state. Each query has:
- Query class: Parameters for the read
- Handler class: Executes the read

Subfolders:
- notifications/ → history page, unread count, online status
"""

from notification_service.application.queries.notifications import (
    GetNotificationHistoryQuery,
    GetNotificationHistoryHandler,
    GetUnreadNotificationCountQuery,
    GetUnreadNotificationCountHandler,
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
