"""Send System Notification Command (broadcast)."""

import logging
from dataclasses import dataclass

from notification_service.application.common.interfaces import Command, CommandHandler
from notification_service.application.common.validation import (
    require_broadcast_targets,
    require_title_and_content,
)
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendSystemNotificationCommand(Command[bool]):
    user_ids: tuple[UserId, ...]
    title: str
    content: str

    def __post_init__(self):
        require_broadcast_targets(self.user_ids)
        require_title_and_content(self.title, self.content)


class SendSystemNotificationHandler(CommandHandler[bool]):
    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, command: SendSystemNotificationCommand) -> bool:
        try:
            await self._dispatcher.send_system_notification(
                list(command.user_ids), command.title, command.content
            )
            return True
        except Exception as e:
            logger.error(
                f"Error sending system notification to {len(command.user_ids)} users: {e}"
            )
            return False
