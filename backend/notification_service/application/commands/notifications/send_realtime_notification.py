"""Send Realtime Notification Command."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from notification_service.application.common.interfaces import Command, CommandHandler
from notification_service.application.common.validation import (
    require_title_and_content,
)
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendRealtimeNotificationCommand(Command[bool]):
    user_id: UserId
    type: NotificationType
    title: str
    content: str
    data: Optional[Any] = None

    def __post_init__(self):
        require_title_and_content(self.title, self.content)


class SendRealtimeNotificationHandler(CommandHandler[bool]):
    """
    Returns True once the notification has been handed to the dispatcher
    without error. Persistence failures are logged and reported as False;
    an offline receiver is still a success.
    """

    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, command: SendRealtimeNotificationCommand) -> bool:
        try:
            await self._dispatcher.send_realtime_notification(
                user_id=command.user_id,
                type=command.type,
                title=command.title,
                content=command.content,
                data=command.data,
            )
            return True
        except Exception as e:
            logger.error(
                f"Error sending realtime notification to user {command.user_id}: {e}"
            )
            return False
