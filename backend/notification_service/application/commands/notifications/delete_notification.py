"""Delete Notification Command."""

from dataclasses import dataclass

from notification_service.application.common.interfaces import Command, CommandHandler
from notification_service.application.common.validation import require_positive
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.exceptions import AccessDeniedError, EntityNotFoundError
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class DeleteNotificationCommand(Command[bool]):
    notification_id: int
    user_id: UserId

    def __post_init__(self):
        require_positive("NotificationId", self.notification_id)


class DeleteNotificationHandler(CommandHandler[bool]):
    def __init__(
        self,
        notification_repository: NotificationHistoryRepository,
        dispatcher: NotificationDispatcher,
    ):
        self._notification_repository = notification_repository
        self._dispatcher = dispatcher

    async def execute(self, command: DeleteNotificationCommand) -> bool:
        notification = await self._notification_repository.get_by_id(
            command.notification_id
        )
        if not notification:
            raise EntityNotFoundError("Notification", command.notification_id)
        if not notification.belongs_to(command.user_id):
            raise AccessDeniedError(
                command.user_id, f"notification {command.notification_id}"
            )

        return await self._dispatcher.delete_notification(
            command.notification_id, command.user_id
        )
