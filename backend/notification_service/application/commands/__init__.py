"""
COMMANDS - Write operations (CQRS)

Commands change state. Each command has:
- Command class: validated parameters (frozen dataclass)
- Handler class: executes the change through the dispatcher

Subfolders:
- notifications/ → send, broadcast, mark read, mark all read, delete
"""

from notification_service.application.commands.notifications import (
    SendRealtimeNotificationCommand,
    SendRealtimeNotificationHandler,
    SendSystemNotificationCommand,
    SendSystemNotificationHandler,
    MarkNotificationAsReadCommand,
    MarkNotificationAsReadHandler,
    MarkAllNotificationsAsReadCommand,
    MarkAllNotificationsAsReadHandler,
    DeleteNotificationCommand,
    DeleteNotificationHandler,
)

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
