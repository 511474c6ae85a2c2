"""
ConnectionId Value Object - opaque handle assigned by the realtime hub.
"""

from dataclasses import dataclass

from notification_service.domain.exceptions.validation_error import (
    DomainValidationError,
)


@dataclass(frozen=True)
class ConnectionId:
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise DomainValidationError("ConnectionId cannot be empty")

    def __str__(self) -> str:
        return self.value
