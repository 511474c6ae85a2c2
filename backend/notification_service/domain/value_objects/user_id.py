"""
UserId Value Object
"""

from dataclasses import dataclass

from notification_service.domain.exceptions.validation_error import (
    DomainValidationError,
)

USER_GROUP_PREFIX = "User_"


def group_name_for(user_id: "UserId") -> str:
    return f"{USER_GROUP_PREFIX}{user_id.value}"


@dataclass(frozen=True)
class UserId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise DomainValidationError("UserId must be an integer")
        if self.value <= 0:
            raise DomainValidationError("UserId must be greater than 0")

    @property
    def group_name(self) -> str:
        """Name of the realtime group holding every connection of this user."""
        return group_name_for(self)

    def __str__(self) -> str:
        return str(self.value)
