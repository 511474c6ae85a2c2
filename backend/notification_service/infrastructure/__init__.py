"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- presence/: Connection registries (in-process, Redis)
- persistence/: Database implementations (Prisma repositories)
- directory/: User service client (httpx)
- cache/: Redis client factory
"""
