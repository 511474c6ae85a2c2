"""Mark Notification As Read Command."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Command, CommandHandler
from notification_service.application.common.validation import require_positive
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class MarkNotificationAsReadCommand(Command[bool]):
    notification_id: int
    user_id: UserId

    def __post_init__(self):
        require_positive("NotificationId", self.notification_id)


class MarkNotificationAsReadHandler(CommandHandler[bool]):
    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, command: MarkNotificationAsReadCommand) -> bool:
        return await self._dispatcher.mark_as_read(
            command.notification_id, command.user_id
        )
