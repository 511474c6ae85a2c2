"""
Realtime Transport Port - Push primitive of the persistent-connection hub.

Implementation: notification_service/application/realtime/hub.py

Delivery is best effort. No acknowledgement is awaited and nothing is
retried; a send to a group with no live sockets is silently a no-op.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable


class RealtimeTransport(ABC):
    @abstractmethod
    async def send_to_group(self, group: str, target: str, *arguments: Any) -> None: ...

    @abstractmethod
    async def send_to_groups(
        self, groups: Iterable[str], target: str, *arguments: Any
    ) -> None:
        """Single multicast to several groups; each socket receives it once."""
        ...
