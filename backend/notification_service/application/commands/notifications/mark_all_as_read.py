"""Mark All Notifications As Read Command."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Command, CommandHandler
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class MarkAllNotificationsAsReadCommand(Command[int]):
    user_id: UserId


class MarkAllNotificationsAsReadHandler(CommandHandler[int]):
    def __init__(self, dispatcher: NotificationDispatcher):
        self._dispatcher = dispatcher

    async def execute(self, command: MarkAllNotificationsAsReadCommand) -> int:
        return await self._dispatcher.mark_all_as_read(command.user_id)
