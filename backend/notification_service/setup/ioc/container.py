"""
Dishka DI Container Setup.

Two providers, so tests can swap the infrastructure while keeping the
application wiring:

- InfrastructureProvider: presence registry, history store, user directory,
  realtime hub (all Scope.APP; connections are opened once and closed when
  the container closes)
- ApplicationProvider: dispatcher and cleanup worker (Scope.APP), command and
  query handlers (Scope.REQUEST)

Flow:
  Container → provides → PrismaNotificationHistoryRepository → to → NotificationDispatcher
                                    ↓
                    uses NotificationHistoryRepository interface
"""

from typing import AsyncIterable

from dishka import AsyncContainer, Provider, Scope, alias, make_async_container, provide

from notification_service.application.commands.notifications import (
    DeleteNotificationHandler,
    MarkAllNotificationsAsReadHandler,
    MarkNotificationAsReadHandler,
    SendRealtimeNotificationHandler,
    SendSystemNotificationHandler,
)
from notification_service.application.queries.notifications import (
    GetNotificationHistoryHandler,
    GetUnreadNotificationCountHandler,
    GetUserOnlineStatusHandler,
    GetUsersOnlineStatusHandler,
)
from notification_service.application.realtime import RealtimeHub
from notification_service.application.services import (
    ConnectionCleanupWorker,
    NotificationDispatcher,
)
from notification_service.config.settings import Config
from notification_service.domain.ports import (
    ConnectionRegistry,
    RealtimeTransport,
    UserDirectory,
)
from notification_service.domain.ports.repositories import (
    NotificationHistoryRepository,
)
from notification_service.infrastructure.cache import (
    close_redis_client,
    create_redis_client,
)
from notification_service.infrastructure.directory import (
    HttpUserDirectory,
    PassthroughUserDirectory,
)
from notification_service.infrastructure.persistence import (
    PrismaNotificationHistoryRepository,
    connect_prisma,
)
from notification_service.infrastructure.persistence.prisma_client import (
    disconnect_prisma,
)
from notification_service.infrastructure.presence import (
    InMemoryConnectionRegistry,
    RedisConnectionRegistry,
)


class InfrastructureProvider(Provider):
    """Adapters for the domain ports."""

    # ==================== PRESENCE ====================

    @provide(scope=Scope.APP)
    async def get_connection_registry(self) -> AsyncIterable[ConnectionRegistry]:
        """
        "redis" shares presence between instances; anything else keeps it
        in this process.
        """
        if Config.CONNECTION_REGISTRY_BACKEND == "redis":
            redis = await create_redis_client(Config.REDIS_URL)
            yield RedisConnectionRegistry(redis, Config.CONNECTION_TTL_SECONDS)
            await close_redis_client(redis)
        else:
            yield InMemoryConnectionRegistry(Config.CONNECTION_TTL_SECONDS)

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_notification_repository(
        self,
    ) -> AsyncIterable[NotificationHistoryRepository]:
        prisma = await connect_prisma()
        yield PrismaNotificationHistoryRepository(prisma)
        await disconnect_prisma(prisma)

    # ==================== USER SERVICE ====================

    @provide(scope=Scope.APP)
    async def get_user_directory(self) -> AsyncIterable[UserDirectory]:
        if not Config.USER_SERVICE_URL:
            yield PassthroughUserDirectory()
            return
        directory = HttpUserDirectory.from_config()
        yield directory
        await directory.aclose()

    # ==================== REALTIME ====================

    hub = provide(RealtimeHub, scope=Scope.APP)
    transport = alias(source=RealtimeHub, provides=RealtimeTransport)


class ApplicationProvider(Provider):
    """Dispatcher, background worker and CQRS handlers."""

    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_dispatcher(
        self,
        registry: ConnectionRegistry,
        notification_repository: NotificationHistoryRepository,
        transport: RealtimeTransport,
    ) -> NotificationDispatcher:
        return NotificationDispatcher(registry, notification_repository, transport)

    @provide(scope=Scope.APP)
    def get_cleanup_worker(self, registry: ConnectionRegistry) -> ConnectionCleanupWorker:
        return ConnectionCleanupWorker(
            registry, Config.CONNECTION_CLEANUP_INTERVAL_SECONDS
        )

    # ==================== COMMAND HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_send_realtime_notification_handler(
        self, dispatcher: NotificationDispatcher
    ) -> SendRealtimeNotificationHandler:
        return SendRealtimeNotificationHandler(dispatcher)

    @provide(scope=Scope.REQUEST)
    def get_send_system_notification_handler(
        self, dispatcher: NotificationDispatcher
    ) -> SendSystemNotificationHandler:
        return SendSystemNotificationHandler(dispatcher)

    @provide(scope=Scope.REQUEST)
    def get_mark_as_read_handler(
        self, dispatcher: NotificationDispatcher
    ) -> MarkNotificationAsReadHandler:
        return MarkNotificationAsReadHandler(dispatcher)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_as_read_handler(
        self, dispatcher: NotificationDispatcher
    ) -> MarkAllNotificationsAsReadHandler:
        return MarkAllNotificationsAsReadHandler(dispatcher)

    @provide(scope=Scope.REQUEST)
    def get_delete_notification_handler(
        self,
        notification_repository: NotificationHistoryRepository,
        dispatcher: NotificationDispatcher,
    ) -> DeleteNotificationHandler:
        return DeleteNotificationHandler(notification_repository, dispatcher)

    # ==================== QUERY HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_notification_history_handler(
        self, notification_repository: NotificationHistoryRepository
    ) -> GetNotificationHistoryHandler:
        return GetNotificationHistoryHandler(
            notification_repository, Config.ACCURATE_TOTAL_COUNT
        )

    @provide(scope=Scope.REQUEST)
    def get_unread_count_handler(
        self, notification_repository: NotificationHistoryRepository
    ) -> GetUnreadNotificationCountHandler:
        return GetUnreadNotificationCountHandler(notification_repository)

    @provide(scope=Scope.REQUEST)
    def get_user_online_status_handler(
        self, dispatcher: NotificationDispatcher
    ) -> GetUserOnlineStatusHandler:
        return GetUserOnlineStatusHandler(dispatcher)

    @provide(scope=Scope.REQUEST)
    def get_users_online_status_handler(
        self, dispatcher: NotificationDispatcher
    ) -> GetUsersOnlineStatusHandler:
        return GetUsersOnlineStatusHandler(dispatcher)


def create_container(*providers: Provider) -> AsyncContainer:
    """
    Create and configure the DI container.

    With no arguments the production providers are used; tests pass their
    own infrastructure provider alongside ApplicationProvider().
    """
    if not providers:
        providers = (InfrastructureProvider(), ApplicationProvider())
    return make_async_container(*providers)
