"""
Realtime Hub - live sockets of this process, grouped per user.

Wire format (JSON text frames):
    server → client  {"type": "invocation", "target": "ReceiveNotification", "arguments": [...]}
    server → client  {"type": "completion", "invocationId": "1", "result": ...}
    client → server  {"type": "invocation", "invocationId": "1",
                      "target": "SendPrivateMessageNotification", "arguments": [7, "hi"]}

Every user's connections are members of the group "User_{user_id}", so a
push to one group reaches all of that user's devices. Sends are best effort:
sockets are written concurrently, each bounded by HUB_SEND_TIMEOUT_SECONDS,
and a socket that fails or stalls is logged and skipped, nothing is retried.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Iterable, Optional, Protocol

from notification_service.config.settings import Config
from notification_service.domain.ports.realtime_transport import RealtimeTransport
from notification_service.observability import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


class ClientSocket(Protocol):
    async def send_json(self, data: Any) -> None: ...


def invocation_message(target: str, arguments: Iterable[Any]) -> dict:
    return {"type": "invocation", "target": target, "arguments": list(arguments)}


def completion_message(
    invocation_id: str, result: Any = None, error: Optional[str] = None
) -> dict:
    message: dict[str, Any] = {"type": "completion", "invocationId": invocation_id}
    if error is not None:
        message["error"] = error
    else:
        message["result"] = result
    return message


class RealtimeHub(RealtimeTransport):
    def __init__(self) -> None:
        self._sockets: dict[str, ClientSocket] = {}
        self._groups: dict[str, set[str]] = defaultdict(set)
        self._lock = asyncio.Lock()
        self.send_timeout: float = Config.HUB_SEND_TIMEOUT_SECONDS

    async def connect(self, connection_id: str, socket: ClientSocket) -> None:
        async with self._lock:
            self._sockets[connection_id] = socket

    async def disconnect(self, connection_id: str) -> None:
        async with self._lock:
            self._sockets.pop(connection_id, None)
            for group in [g for g, members in self._groups.items() if connection_id in members]:
                self._discard_member(group, connection_id)

    async def add_to_group(self, connection_id: str, group: str) -> None:
        async with self._lock:
            self._groups[group].add(connection_id)
        logger.debug(f"Connection {connection_id} joined group {group}")

    async def remove_from_group(self, connection_id: str, group: str) -> None:
        async with self._lock:
            self._discard_member(group, connection_id)
        logger.debug(f"Connection {connection_id} left group {group}")

    def _discard_member(self, group: str, connection_id: str) -> None:
        members = self._groups.get(group)
        if not members:
            return
        members.discard(connection_id)
        if not members:
            self._groups.pop(group, None)

    async def group_members(self, group: str) -> set[str]:
        async with self._lock:
            return set(self._groups.get(group, set()))

    async def send_to_group(self, group: str, target: str, *arguments: Any) -> None:
        await self.send_to_groups([group], target, *arguments)

    async def send_to_groups(
        self, groups: Iterable[str], target: str, *arguments: Any
    ) -> None:
        async with self._lock:
            connection_ids: set[str] = set()
            for group in groups:
                connection_ids.update(self._groups.get(group, set()))
            targets = [
                (cid, self._sockets[cid]) for cid in connection_ids if cid in self._sockets
            ]

        if not targets:
            return
        await self._deliver(targets, invocation_message(target, arguments))

    async def send_to_connection(self, connection_id: str, message: dict) -> None:
        async with self._lock:
            socket = self._sockets.get(connection_id)
        if socket is not None:
            await self._deliver([(connection_id, socket)], message)

    async def _deliver(self, targets: list[tuple[str, ClientSocket]], message: dict) -> None:
        await asyncio.gather(
            *(self._send_one(cid, socket, message) for cid, socket in targets)
        )

    async def _send_one(self, connection_id: str, socket: ClientSocket, message: dict) -> None:
        try:
            await asyncio.wait_for(socket.send_json(message), timeout=self.send_timeout)
        except asyncio.TimeoutError:
            increment_error(MetricsErrorType.PUSH_FAILED)
            logger.warning(
                f"Push to connection {connection_id} timed out after {self.send_timeout}s"
            )
        except Exception as e:
            increment_error(MetricsErrorType.PUSH_FAILED)
            logger.warning(f"Push to connection {connection_id} failed: {e}")
