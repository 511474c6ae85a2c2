"""
Redis Connection Registry - presence shared by every service instance.

Redis Data Structures:
- "presence:user:{user_id}"  SET of connection ids for one user
- "presence:connections"     HASH connection_id -> user_id (reverse index)

Each write refreshes a TTL (Config.CONNECTION_TTL_SECONDS, default 24h) on
the keys it touches, so a user set nobody writes to for a day disappears on
its own. cleanup() then drops reverse-index fields that point at a set which
no longer contains them.

Error Handling:
- Redis failures never reach the caller
- Log and degrade to empty / False / 0
"""

import logging
from typing import Iterable, TYPE_CHECKING

from notification_service.config.settings import Config
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.user_id import UserId
from notification_service.observability import MetricsErrorType, increment_error

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisConnectionRegistry(ConnectionRegistry):
    KEY_PREFIX = "presence:"
    CONNECTIONS_KEY = "presence:connections"

    def __init__(self, redis: "Redis", ttl_seconds: int = Config.CONNECTION_TTL_SECONDS):
        self._redis = redis
        self._ttl = ttl_seconds

    def _user_key(self, user_id: int | str) -> str:
        return f"{self.KEY_PREFIX}user:{user_id}"

    async def add_connection(self, connection_id: ConnectionId, user_id: UserId) -> None:
        try:
            previous_owner = await self._redis.hget(
                self.CONNECTIONS_KEY, connection_id.value
            )

            pipe = self._redis.pipeline()
            if previous_owner is not None and int(previous_owner) != user_id.value:
                pipe.srem(self._user_key(previous_owner), connection_id.value)
            user_key = self._user_key(user_id.value)
            pipe.sadd(user_key, connection_id.value)
            pipe.expire(user_key, self._ttl)
            pipe.hset(self.CONNECTIONS_KEY, connection_id.value, str(user_id.value))
            pipe.expire(self.CONNECTIONS_KEY, self._ttl)
            await pipe.execute()

            logger.info(f"Added connection {connection_id} for user {user_id}")
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(
                f"Failed to add connection {connection_id} for user {user_id}: {e}"
            )

    async def remove_connection(self, connection_id: ConnectionId) -> None:
        try:
            user_id = await self._redis.hget(self.CONNECTIONS_KEY, connection_id.value)
            if user_id is None:
                return

            pipe = self._redis.pipeline()
            # an emptied SET is deleted by Redis itself
            pipe.srem(self._user_key(user_id), connection_id.value)
            pipe.hdel(self.CONNECTIONS_KEY, connection_id.value)
            await pipe.execute()

            logger.info(f"Removed connection {connection_id} for user {user_id}")
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to remove connection {connection_id}: {e}")

    async def get_connections(self, user_id: UserId) -> set[ConnectionId]:
        try:
            members = await self._redis.smembers(self._user_key(user_id.value))
            return {ConnectionId(cid) for cid in members}
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to get connections for user {user_id}: {e}")
            return set()

    async def get_connections_for_users(
        self, user_ids: Iterable[UserId]
    ) -> set[ConnectionId]:
        try:
            keys = [self._user_key(uid.value) for uid in user_ids]
            if not keys:
                return set()

            pipe = self._redis.pipeline()
            for key in keys:
                pipe.smembers(key)
            results = await pipe.execute()

            connections: set[ConnectionId] = set()
            for members in results:
                connections.update(ConnectionId(cid) for cid in members)
            return connections
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to get connections for multiple users: {e}")
            return set()

    async def is_online(self, user_id: UserId) -> bool:
        try:
            return await self._redis.scard(self._user_key(user_id.value)) > 0
        except Exception as e:
            increment_error(MetricsErrorType.PRESENCE_FAILED)
            logger.error(f"Failed to check online status for user {user_id}: {e}")
            return False

    async def cleanup(self) -> int:
        try:
            owners = await self._redis.hgetall(self.CONNECTIONS_KEY)
            if not owners:
                return 0

            pairs = list(owners.items())
            pipe = self._redis.pipeline()
            for connection_id, user_id in pairs:
                pipe.sismember(self._user_key(user_id), connection_id)
            memberships = await pipe.execute()

            stale = [
                connection_id
                for (connection_id, _), is_member in zip(pairs, memberships)
                if not is_member
            ]
            if stale:
                await self._redis.hdel(self.CONNECTIONS_KEY, *stale)
                logger.info(f"Connection cleanup reaped {len(stale)} stale connection(s)")
            return len(stale)
        except Exception as e:
            increment_error(MetricsErrorType.CLEANUP_FAILED)
            logger.error(f"Connection cleanup failed: {e}")
            return 0
