"""
Command/query seams for the notification use cases.

Commands change notification state (send, broadcast, mark read, delete);
queries read history or presence. Each handler exposes a single async
``execute`` so REST, RPC and hub callers share one code path.

    @dataclass(frozen=True)
    class MarkNotificationAsReadCommand(Command[bool]):
        notification_id: int
        user_id: UserId

    class MarkNotificationAsReadHandler(CommandHandler[bool]):
        async def execute(self, command: MarkNotificationAsReadCommand) -> bool:
            return await self._dispatcher.mark_as_read(
                command.notification_id, command.user_id
            )
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TResult = TypeVar("TResult")


class Command(ABC, Generic[TResult]):
    """Marker for state-changing requests."""


class Query(ABC, Generic[TResult]):
    """Marker for read-only requests."""


class CommandHandler(ABC, Generic[TResult]):
    @abstractmethod
    async def execute(self, command: Command[TResult]) -> TResult: ...


class QueryHandler(ABC, Generic[TResult]):
    @abstractmethod
    async def execute(self, query: Query[TResult]) -> TResult: ...
