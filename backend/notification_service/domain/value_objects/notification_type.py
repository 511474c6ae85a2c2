"""
NotificationType Value Object.

Every variant carries its delivery policy. Only ``message`` and ``system``
notifications are written to history on dispatch; the other types are
push-only and are lost when the receiver is offline.
"""

from enum import Enum

from notification_service.domain.exceptions.validation_error import (
    DomainValidationError,
)


class NotificationType(str, Enum):
    MESSAGE = ("message", True)
    FRIEND_REQUEST = ("friend_request", False)
    FRIEND_ACCEPTED = ("friend_accepted", False)
    SYSTEM = ("system", True)
    TEST = ("test", False)

    persist_on_dispatch: bool

    def __new__(cls, value: str, persist_on_dispatch: bool):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.persist_on_dispatch = persist_on_dispatch
        return obj

    @classmethod
    def parse(cls, value: "str | NotificationType") -> "NotificationType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise DomainValidationError(
                f"Invalid notification type: {value!r}. Must be one of {allowed}."
            )

    def __str__(self) -> str:
        return self.value
