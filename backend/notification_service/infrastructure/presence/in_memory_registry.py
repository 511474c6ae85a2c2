"""
In-process Connection Registry.

Keeps two indexes behind one asyncio.Lock:
- per-user index:   user_id -> {connection_id, ...} (+ expiry)
- reverse index:    connection_id -> user_id

Every write to a user's entry pushes its expiry out by the TTL (24h by
default). An entry whose expiry has passed is treated as offline by every
read and is physically removed by cleanup(). The TTL only catches
connections whose disconnect was never observed (killed browser, dropped
network); the normal removal path is remove_connection().

Only valid for a single instance. Use RedisConnectionRegistry when several
instances share presence.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable

from notification_service.config.settings import Config
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.user_id import UserId
from notification_service.observability import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


@dataclass
class _UserEntry:
    connections: set[str] = field(default_factory=set)
    expires_at: float = 0.0


class InMemoryConnectionRegistry(ConnectionRegistry):
    def __init__(
        self,
        ttl_seconds: float = Config.CONNECTION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._users: dict[int, _UserEntry] = {}
        self._owners: dict[str, int] = {}
        self._lock = asyncio.Lock()

    def _live_entry(self, user_id: int) -> _UserEntry | None:
        entry = self._users.get(user_id)
        if entry is None or entry.expires_at <= self._clock():
            return None
        return entry

    def _detach(self, connection_id: str, user_id: int) -> None:
        entry = self._users.get(user_id)
        if entry is None:
            return
        entry.connections.discard(connection_id)
        if entry.connections:
            entry.expires_at = self._clock() + self._ttl
        else:
            del self._users[user_id]

    async def add_connection(self, connection_id: ConnectionId, user_id: UserId) -> None:
        try:
            async with self._lock:
                previous_owner = self._owners.get(connection_id.value)
                if previous_owner is not None and previous_owner != user_id.value:
                    self._detach(connection_id.value, previous_owner)

                entry = self._live_entry(user_id.value)
                if entry is None:
                    stale = self._users.pop(user_id.value, None)
                    if stale:
                        for cid in stale.connections:
                            if self._owners.get(cid) == user_id.value:
                                del self._owners[cid]
                    entry = _UserEntry()
                    self._users[user_id.value] = entry

                entry.connections.add(connection_id.value)
                entry.expires_at = self._clock() + self._ttl
                self._owners[connection_id.value] = user_id.value

            logger.info(f"Added connection {connection_id} for user {user_id}")
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(
                f"Failed to add connection {connection_id} for user {user_id}: {e}"
            )

    async def remove_connection(self, connection_id: ConnectionId) -> None:
        try:
            async with self._lock:
                user_id = self._owners.pop(connection_id.value, None)
                if user_id is None:
                    return
                self._detach(connection_id.value, user_id)

            logger.info(f"Removed connection {connection_id} for user {user_id}")
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to remove connection {connection_id}: {e}")

    async def get_connections(self, user_id: UserId) -> set[ConnectionId]:
        try:
            async with self._lock:
                entry = self._live_entry(user_id.value)
                if entry is None:
                    return set()
                return {ConnectionId(cid) for cid in entry.connections}
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to get connections for user {user_id}: {e}")
            return set()

    async def get_connections_for_users(
        self, user_ids: Iterable[UserId]
    ) -> set[ConnectionId]:
        try:
            result: set[ConnectionId] = set()
            async with self._lock:
                for user_id in user_ids:
                    entry = self._live_entry(user_id.value)
                    if entry:
                        result.update(ConnectionId(cid) for cid in entry.connections)
            return result
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to get connections for multiple users: {e}")
            return set()

    async def is_online(self, user_id: UserId) -> bool:
        try:
            async with self._lock:
                entry = self._live_entry(user_id.value)
                return bool(entry and entry.connections)
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to check online status for user {user_id}: {e}")
            return False

    async def cleanup(self) -> int:
        try:
            async with self._lock:
                now = self._clock()
                expired = [
                    uid for uid, entry in self._users.items() if entry.expires_at <= now
                ]
                reaped = 0
                for uid in expired:
                    entry = self._users.pop(uid)
                    for cid in entry.connections:
                        if self._owners.get(cid) == uid:
                            del self._owners[cid]
                            reaped += 1

                # reverse entries whose owner no longer tracks them
                orphans = [
                    cid
                    for cid, uid in self._owners.items()
                    if uid not in self._users or cid not in self._users[uid].connections
                ]
                for cid in orphans:
                    del self._owners[cid]
                reaped += len(orphans)

            if reaped:
                logger.info(f"Connection cleanup reaped {reaped} stale connection(s)")
            return reaped
        except Exception as e:
            increment_error(MetricsErrorType.CLEANUP_FAILED)
            logger.error(f"Connection cleanup failed: {e}")
            return 0
