"""
DOMAIN LAYER - Notification and presence rules

This layer contains:
- Entities: Connection, NotificationRecord, PagedResult
- Value Objects: UserId, ConnectionId, NotificationType
- Ports: Interfaces that infrastructure implements (registry, history, directory)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Redis, Pydantic)
2. NO I/O operations
3. Only depends on Python stdlib
"""
