"""Notification commands."""

from .send_realtime_notification import (
    SendRealtimeNotificationCommand,
    SendRealtimeNotificationHandler,
)
from .send_system_notification import (
    SendSystemNotificationCommand,
    SendSystemNotificationHandler,
)
from .mark_as_read import MarkNotificationAsReadCommand, MarkNotificationAsReadHandler
from .mark_all_as_read import (
    MarkAllNotificationsAsReadCommand,
    MarkAllNotificationsAsReadHandler,
)
from .delete_notification import DeleteNotificationCommand, DeleteNotificationHandler

__all__ = [
    "SendRealtimeNotificationCommand",
    "SendRealtimeNotificationHandler",
    "SendSystemNotificationCommand",
    "SendSystemNotificationHandler",
    "MarkNotificationAsReadCommand",
    "MarkNotificationAsReadHandler",
    "MarkAllNotificationsAsReadCommand",
    "MarkAllNotificationsAsReadHandler",
    "DeleteNotificationCommand",
    "DeleteNotificationHandler",
]
