"""Input rules shared by commands and queries."""

from typing import Sequence

from notification_service.config.settings import Config
from notification_service.domain.exceptions import DomainValidationError
from notification_service.domain.value_objects.user_id import UserId


def require_text(field: str, value: str, max_length: int) -> None:
    if not value or not value.strip():
        raise DomainValidationError(f"{field} is required", field=field)
    if len(value) > max_length:
        raise DomainValidationError(
            f"{field} cannot exceed {max_length} characters", field=field
        )


def require_title_and_content(title: str, content: str) -> None:
    require_text("Title", title, Config.NOTIFICATION_TITLE_MAX)
    require_text("Content", content, Config.NOTIFICATION_CONTENT_MAX)


def require_positive(field: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise DomainValidationError(f"{field} must be greater than 0", field=field)


def require_broadcast_targets(
    user_ids: Sequence[UserId], action: str = "send system notification to"
) -> None:
    if not user_ids:
        raise DomainValidationError("UserIds cannot be empty")
    if len(user_ids) > Config.BROADCAST_MAX_USERS:
        raise DomainValidationError(
            f"Cannot {action} more than {Config.BROADCAST_MAX_USERS} users at once"
        )
    if len(set(user_ids)) != len(user_ids):
        raise DomainValidationError("UserIds cannot contain duplicates")


def require_page(page: int, size: int) -> None:
    require_positive("Page", page)
    require_positive("Size", size)
    if size > Config.NOTIFICATION_PAGE_SIZE_MAX:
        raise DomainValidationError(
            f"Size cannot exceed {Config.NOTIFICATION_PAGE_SIZE_MAX}"
        )
