"""
Presence-Aware Notification Dispatcher.

Decides, per notification, between pushing live and leaving a history trace:

1. ``message`` and ``system`` notifications are written to history FIRST,
   whether or not the receiver is online.
2. The connection registry is asked whether the receiver is online.
3. Online: push "ReceiveNotification" to the receiver's group. The push is
   fire-and-forget; a failed push is logged, never retried, never raised.
4. Offline: nothing is pushed. Persisted types survive in history; every
   other type (friend_request, friend_accepted, test) is dropped.

Persist and push are two independent steps, no transaction spans them.
A history write failure propagates to the caller; presence and push
failures do not.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.ports.realtime_transport import RealtimeTransport
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId
from notification_service.observability import (
    Delivery,
    MetricsErrorType,
    increment_dispatched,
    increment_error,
    observe_broadcast_recipients,
)

logger = logging.getLogger(__name__)

RECEIVE_NOTIFICATION = "ReceiveNotification"
UNREAD_COUNT_UPDATED = "UnreadCountUpdated"


class NotificationDispatcher:
    def __init__(
        self,
        registry: ConnectionRegistry,
        history: NotificationHistoryRepository,
        transport: RealtimeTransport,
    ):
        self._registry = registry
        self._history = history
        self._transport = transport

    async def send_realtime_notification(
        self,
        user_id: UserId,
        type: NotificationType,
        title: str,
        content: str,
        data: Optional[Any] = None,
    ) -> Optional[int]:
        """
        Deliver one notification to one user.

        Returns:
            The history id when the type is persisted, otherwise None.
        """
        notification_id = None
        if type.persist_on_dispatch:
            record = NotificationRecord.create(
                user_id=user_id, type=type, title=title, content=content
            )
            notification_id = await self._persist(record)

        if await self._registry.is_online(user_id):
            await self._push(
                [user_id.group_name],
                RECEIVE_NOTIFICATION,
                {
                    "type": type.value,
                    "title": title,
                    "content": content,
                    "data": data,
                    "timestamp": _utc_timestamp(),
                },
            )
            increment_dispatched(type.value, Delivery.PUSHED)
            logger.info(f"Sent realtime notification to user {user_id}, type: {type}")
        elif type.persist_on_dispatch:
            increment_dispatched(type.value, Delivery.STORED)
            logger.info(f"User {user_id} is offline, notification saved to history only")
        else:
            increment_dispatched(type.value, Delivery.DROPPED)
            logger.info(f"User {user_id} is offline, {type} notification dropped")

        return notification_id

    async def send_system_notification(
        self, user_ids: Sequence[UserId], title: str, content: str
    ) -> None:
        """
        Broadcast a system notification.

        One history row per user, then ONE multicast push addressed to every
        target's group (not one push per user), sent only if at least one
        target currently has a connection.
        """
        observe_broadcast_recipients(len(user_ids))

        await asyncio.gather(
            *(
                self._persist(
                    NotificationRecord.create(
                        user_id=user_id,
                        type=NotificationType.SYSTEM,
                        title=title,
                        content=content,
                    )
                )
                for user_id in user_ids
            )
        )

        online_connections = await self._registry.get_connections_for_users(user_ids)
        if not online_connections:
            increment_dispatched(NotificationType.SYSTEM.value, Delivery.STORED)
            logger.info(
                f"System notification stored for {len(user_ids)} users, none online"
            )
            return

        await self._push(
            [user_id.group_name for user_id in user_ids],
            RECEIVE_NOTIFICATION,
            {
                "type": NotificationType.SYSTEM.value,
                "title": title,
                "content": content,
                "timestamp": _utc_timestamp(),
            },
        )
        increment_dispatched(NotificationType.SYSTEM.value, Delivery.PUSHED)
        logger.info(f"Sent system notification to {len(user_ids)} users")

    async def is_user_online(self, user_id: UserId) -> bool:
        return await self._registry.is_online(user_id)

    async def get_users_online_status(
        self, user_ids: Sequence[UserId]
    ) -> dict[int, bool]:
        return {
            user_id.value: await self._registry.is_online(user_id)
            for user_id in user_ids
        }

    async def mark_as_read(self, notification_id: int, user_id: UserId) -> bool:
        """Mark one notification read; the owner's clients get the new unread count."""
        updated = await self._history.mark_as_read(notification_id, user_id)
        if updated:
            unread = await self._history.get_unread_count(user_id)
            await self._push([user_id.group_name], UNREAD_COUNT_UPDATED, unread)
        return updated

    async def mark_all_as_read(self, user_id: UserId) -> int:
        updated = await self._history.mark_all_as_read(user_id)
        await self._push([user_id.group_name], UNREAD_COUNT_UPDATED, 0)
        return updated

    async def delete_notification(self, notification_id: int, user_id: UserId) -> bool:
        deleted = await self._history.delete(notification_id, user_id)
        if deleted:
            unread = await self._history.get_unread_count(user_id)
            await self._push([user_id.group_name], UNREAD_COUNT_UPDATED, unread)
        return deleted

    async def _persist(self, record: NotificationRecord) -> int:
        try:
            return await self._history.create(record)
        except Exception:
            increment_error(MetricsErrorType.PERSIST_FAILED)
            raise

    async def _push(self, groups: list[str], target: str, payload: Any) -> None:
        try:
            await self._transport.send_to_groups(groups, target, payload)
        except Exception as e:
            increment_error(MetricsErrorType.PUSH_FAILED)
            logger.warning(f"Push of {target} to {groups} failed: {e}")


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
