"""
Connection Registry Port - Who is online, and through which connections.

Implementations:
- notification_service/infrastructure/presence/in_memory_registry.py
- notification_service/infrastructure/presence/redis_registry.py

Contract:
- Operations never raise. Storage errors are logged and the call degrades
  to "not found" (empty set, False, 0). Dispatch must not fail because
  presence tracking glitched.
- A connection id belongs to at most one user at a time.
- Entries expire after a fixed TTL as a fallback for missed disconnects;
  cleanup() reaps whatever has expired.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.user_id import UserId


class ConnectionRegistry(ABC):
    @abstractmethod
    async def add_connection(
        self, connection_id: ConnectionId, user_id: UserId
    ) -> None: ...

    @abstractmethod
    async def remove_connection(self, connection_id: ConnectionId) -> None: ...

    @abstractmethod
    async def get_connections(self, user_id: UserId) -> set[ConnectionId]: ...

    @abstractmethod
    async def get_connections_for_users(
        self, user_ids: Iterable[UserId]
    ) -> set[ConnectionId]: ...

    @abstractmethod
    async def is_online(self, user_id: UserId) -> bool: ...

    @abstractmethod
    async def cleanup(self) -> int:
        """Reap expired entries. Returns the number of connections removed."""
        ...
