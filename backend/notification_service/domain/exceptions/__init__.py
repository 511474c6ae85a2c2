"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by presentation layer.
Presentation layer maps them to HTTP status codes.
"""

from notification_service.domain.exceptions.entity_not_found import EntityNotFoundError
from notification_service.domain.exceptions.access_denied import AccessDeniedError
from notification_service.domain.exceptions.validation_error import DomainValidationError
from notification_service.domain.exceptions.invalid_state import InvalidStateTransition

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "InvalidStateTransition",
]
