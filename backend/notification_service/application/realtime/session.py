"""
Chat hub session - one per realtime connection.

Lifecycle:
    CONNECTING ──on_connected──► CONNECTED ──on_disconnected──► DISCONNECTED

DISCONNECTED is terminal. on_disconnected may run more than once (socket
error followed by the endpoint's finally block); only the first call acts.
"""

import inspect
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Sequence

from notification_service.application.commands.notifications import (
    SendRealtimeNotificationCommand,
    SendRealtimeNotificationHandler,
)
from notification_service.application.realtime.hub import ClientSocket, RealtimeHub
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.entities.connection import Connection
from notification_service.domain.exceptions import InvalidStateTransition
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.ports.user_directory import UserDirectory
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import (
    USER_GROUP_PREFIX,
    UserId,
)
from notification_service.observability import (
    decrement_active_connections,
    increment_active_connections,
)

logger = logging.getLogger(__name__)

PRIVATE_MESSAGE_TITLE = "New message"


class HubSessionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


_ALLOWED_TRANSITIONS = {
    HubSessionState.CONNECTING: {
        HubSessionState.CONNECTED,
        HubSessionState.DISCONNECTED,
    },
    HubSessionState.CONNECTED: {HubSessionState.DISCONNECTED},
    HubSessionState.DISCONNECTED: set(),
}


class HubMethodError(Exception):
    """Raised for an invocation the hub cannot serve; reported back to the caller."""


class ChatHubSession:
    def __init__(
        self,
        connection_id: ConnectionId,
        user_id: UserId,
        hub: RealtimeHub,
        registry: ConnectionRegistry,
        dispatcher: NotificationDispatcher,
        user_directory: UserDirectory,
    ):
        self.connection = Connection(connection_id=connection_id, user_id=user_id)
        self.state = HubSessionState.CONNECTING
        self._hub = hub
        self._registry = registry
        self._send_handler = SendRealtimeNotificationHandler(dispatcher)
        self._user_directory = user_directory
        self._methods = {
            "SendPrivateMessageNotification": self.send_private_message_notification,
            "JoinGroup": self.join_group,
            "LeaveGroup": self.leave_group,
            "Ping": self.ping,
        }

    @property
    def connection_id(self) -> ConnectionId:
        return self.connection.connection_id

    @property
    def user_id(self) -> UserId:
        return self.connection.user_id

    def _transition(self, target: HubSessionState) -> None:
        if target not in _ALLOWED_TRANSITIONS[self.state]:
            raise InvalidStateTransition(self.state.value, target.value)
        self.state = target

    async def on_connected(self, socket: ClientSocket) -> None:
        self._transition(HubSessionState.CONNECTED)
        cid = self.connection_id.value
        await self._hub.connect(cid, socket)
        await self._hub.add_to_group(cid, self.user_id.group_name)
        await self._registry.add_connection(self.connection_id, self.user_id)
        self.connection.connected_at = datetime.now(timezone.utc)
        increment_active_connections()
        logger.info(f"User {self.user_id} connected with connection {cid}")

    async def on_disconnected(self, error: Optional[BaseException] = None) -> None:
        if self.state == HubSessionState.DISCONNECTED:
            return
        was_connected = self.state == HubSessionState.CONNECTED
        self._transition(HubSessionState.DISCONNECTED)
        if not was_connected:
            return

        cid = self.connection_id.value
        # each step runs even if an earlier one failed; presence must be cleared
        steps = [
            ("leave group", lambda: self._hub.remove_from_group(cid, self.user_id.group_name)),
            ("hub disconnect", lambda: self._hub.disconnect(cid)),
            ("registry removal", lambda: self._registry.remove_connection(self.connection_id)),
        ]
        for step, operation in steps:
            try:
                await operation()
            except Exception as e:
                logger.error(f"Error during {step} for connection {cid}: {e}")
        decrement_active_connections()

        duration = datetime.now(timezone.utc) - self.connection.connected_at
        if error is not None:
            logger.warning(f"User {self.user_id} disconnected with error: {error}")
        else:
            logger.info(
                f"User {self.user_id} disconnected from connection {cid} "
                f"after {duration.total_seconds():.0f}s"
            )

    async def invoke(self, target: str, arguments: Sequence[Any]) -> Any:
        if self.state != HubSessionState.CONNECTED:
            raise HubMethodError(f"Connection is {self.state.value}")
        method = self._methods.get(target)
        if method is None:
            raise HubMethodError(f"Unknown hub method '{target}'")
        try:
            inspect.signature(method).bind(*arguments)
        except TypeError as e:
            raise HubMethodError(f"Invalid arguments for '{target}': {e}") from e
        return await method(*arguments)

    # ==================== HUB METHODS ====================

    async def send_private_message_notification(
        self, receiver_id: int, message: str
    ) -> bool:
        receiver = UserId(receiver_id)
        if not await self._user_directory.is_active(receiver):
            logger.warning(
                f"Skipping private message notification from {self.user_id}: "
                f"receiver {receiver} is not an active user"
            )
            return False

        command = SendRealtimeNotificationCommand(
            user_id=receiver,
            type=NotificationType.MESSAGE,
            title=PRIVATE_MESSAGE_TITLE,
            content=message,
            data={"sender_id": self.user_id.value, "message": message},
        )
        return await self._send_handler.execute(command)

    async def join_group(self, group_name: str) -> None:
        self._check_group_name(group_name)
        await self._hub.add_to_group(self.connection_id.value, group_name)
        logger.info(f"User {self.user_id} joined group {group_name}")

    async def leave_group(self, group_name: str) -> None:
        self._check_group_name(group_name)
        await self._hub.remove_from_group(self.connection_id.value, group_name)
        logger.info(f"User {self.user_id} left group {group_name}")

    async def ping(self) -> str:
        return "pong"

    def _check_group_name(self, group_name: str) -> None:
        if not isinstance(group_name, str) or not group_name.strip():
            raise HubMethodError("Group name is required")
        # User groups are managed by the hub itself
        if group_name.startswith(USER_GROUP_PREFIX):
            raise HubMethodError(f"Group '{group_name}' is reserved")
