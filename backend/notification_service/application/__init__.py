"""
APPLICATION LAYER - Use cases

This layer contains:
- Commands / Queries: CQRS write and read operations with their handlers
- Services: NotificationDispatcher, ConnectionCleanupWorker
- Realtime: the connection hub and per-connection sessions
- DTOs: API-facing response models

Depends on the domain layer only (plus Pydantic for DTOs).
"""
