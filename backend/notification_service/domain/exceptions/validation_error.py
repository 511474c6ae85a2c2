"""Rejected notification input (bad title, empty broadcast, page out of range). HTTP 400."""
from typing import Optional


class DomainValidationError(Exception):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
