"""
Background Cleanup Task.

Periodically asks the connection registry to reap stale presence entries.
A failing pass is logged and the loop carries on; only the stop event ends it.
"""

import asyncio
import logging

from notification_service.config.settings import Config
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.observability import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


class ConnectionCleanupWorker:
    def __init__(
        self,
        registry: ConnectionRegistry,
        interval_seconds: float = Config.CONNECTION_CLEANUP_INTERVAL_SECONDS,
    ):
        self._registry = registry
        self._interval = interval_seconds

    async def run_once(self) -> int:
        try:
            removed = await self._registry.cleanup()
        except Exception as e:
            increment_error(MetricsErrorType.CLEANUP_FAILED)
            logger.error(f"Error occurred during connection cleanup: {e}")
            return 0
        logger.info(f"Connection cleanup completed, removed {removed} stale entries")
        return removed

    async def run(self, stop_event: asyncio.Event) -> None:
        logger.info(f"Connection cleanup started, interval {self._interval}s")
        while not stop_event.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                continue
        logger.info("Connection cleanup stopped")
