"""
Prisma client lifecycle.

The generated client only exists after `prisma generate`, so it is imported
when the application actually connects rather than at module import.
"""

import logging

logger = logging.getLogger(__name__)


async def connect_prisma():
    """Create and connect the Prisma client (DATABASE_URL comes from the env)."""
    from prisma import Prisma

    prisma = Prisma()
    await prisma.connect()
    logger.info("[Prisma] Connected")
    return prisma


async def disconnect_prisma(prisma) -> None:
    if prisma is not None and prisma.is_connected():
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")
