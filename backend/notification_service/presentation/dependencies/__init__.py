"""FastAPI dependencies."""

from notification_service.presentation.dependencies.auth import (
    AuthUser,
    decode_token,
    get_current_user,
)

__all__ = [
    "AuthUser",
    "decode_token",
    "get_current_user",
]
