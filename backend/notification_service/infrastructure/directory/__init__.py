"""
Directory Layer - User service lookups.
"""

from notification_service.infrastructure.directory.http_user_directory import (
    HttpUserDirectory,
    PassthroughUserDirectory,
)

__all__ = [
    "HttpUserDirectory",
    "PassthroughUserDirectory",
]
