"""In-memory stand-ins for the infrastructure ports."""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from dishka import Provider, Scope, alias, provide

from notification_service.application.realtime import RealtimeHub
from notification_service.domain.entities.notification import NotificationRecord
from notification_service.domain.entities.user import UserSummary
from notification_service.domain.ports import (
    ConnectionRegistry,
    RealtimeTransport,
    UserDirectory,
)
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.domain.value_objects.user_id import UserId


class InMemoryHistoryRepository(NotificationHistoryRepository):
    def __init__(self):
        self.records: dict[int, NotificationRecord] = {}
        self._next_id = 1
        self.fail_writes = False

    async def create(self, record: NotificationRecord) -> int:
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        record.id = self._next_id
        self._next_id += 1
        self.records[record.id] = replace(record)
        return record.id

    async def get_by_id(self, notification_id: int) -> Optional[NotificationRecord]:
        return self.records.get(notification_id)

    def _for_user(self, user_id: UserId) -> list[NotificationRecord]:
        return sorted(
            (r for r in self.records.values() if r.user_id == user_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )

    async def get_by_user(
        self, user_id: UserId, page: int = 1, size: int = 20
    ) -> list[NotificationRecord]:
        start = (page - 1) * size
        return self._for_user(user_id)[start : start + size]

    async def count_by_user(self, user_id: UserId) -> int:
        return len(self._for_user(user_id))

    async def get_unread_count(self, user_id: UserId) -> int:
        return sum(1 for r in self._for_user(user_id) if not r.is_read)

    async def mark_as_read(self, notification_id: int, user_id: UserId) -> bool:
        record = self.records.get(notification_id)
        if record is None or not record.belongs_to(user_id):
            return False
        record.mark_read()
        return True

    async def mark_all_as_read(self, user_id: UserId) -> int:
        unread = [r for r in self._for_user(user_id) if not r.is_read]
        for record in unread:
            record.mark_read()
        return len(unread)

    async def delete(self, notification_id: int, user_id: UserId) -> bool:
        record = self.records.get(notification_id)
        if record is None or not record.belongs_to(user_id):
            return False
        del self.records[notification_id]
        return True

    def rows_for(self, user_id: int) -> list[NotificationRecord]:
        return [r for r in self.records.values() if r.user_id.value == user_id]


class RecordingTransport(RealtimeTransport):
    """Remembers every push as (groups, target, arguments)."""

    def __init__(self, fail: bool = False):
        self.calls: list[tuple[list[str], str, tuple]] = []
        self.fail = fail

    async def send_to_group(self, group: str, target: str, *arguments: Any) -> None:
        await self.send_to_groups([group], target, *arguments)

    async def send_to_groups(
        self, groups: Iterable[str], target: str, *arguments: Any
    ) -> None:
        self.calls.append((list(groups), target, arguments))
        if self.fail:
            raise ConnectionError("hub unavailable")

    def calls_to(self, target: str) -> list[tuple[list[str], str, tuple]]:
        return [call for call in self.calls if call[1] == target]


class FakeSocket:
    def __init__(self, fail: bool = False):
        self.sent: list[dict] = []
        self.fail = fail

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class StalledSocket:
    """A client whose transport never drains."""

    async def send_json(self, data: Any) -> None:
        await asyncio.Event().wait()


class StaticUserDirectory(UserDirectory):
    """Every positive id is an active user unless listed as inactive."""

    def __init__(self, inactive: Iterable[int] = ()):
        self.inactive = set(inactive)

    async def get_user(self, user_id: UserId) -> Optional[UserSummary]:
        return UserSummary(user_id=user_id, is_active=user_id.value not in self.inactive)


class FakeInfrastructureProvider(Provider):
    def __init__(
        self,
        registry: ConnectionRegistry,
        history: NotificationHistoryRepository,
        hub: RealtimeHub,
        user_directory: UserDirectory,
    ):
        super().__init__()
        self._registry = registry
        self._history = history
        self._hub = hub
        self._user_directory = user_directory

    @provide(scope=Scope.APP)
    def get_connection_registry(self) -> ConnectionRegistry:
        return self._registry

    @provide(scope=Scope.APP)
    def get_notification_repository(self) -> NotificationHistoryRepository:
        return self._history

    @provide(scope=Scope.APP)
    def get_user_directory(self) -> UserDirectory:
        return self._user_directory

    @provide(scope=Scope.APP)
    def get_hub(self) -> RealtimeHub:
        return self._hub

    transport = alias(source=RealtimeHub, provides=RealtimeTransport)


def make_record(user_id: int, type, title="T", content="C", **overrides) -> NotificationRecord:
    record = NotificationRecord.create(
        user_id=UserId(user_id), type=type, title=title, content=content
    )
    record.created_at = overrides.pop("created_at", datetime.now(timezone.utc))
    for key, value in overrides.items():
        setattr(record, key, value)
    return record
