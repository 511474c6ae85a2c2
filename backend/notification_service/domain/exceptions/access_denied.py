"""
AccessDeniedError - A user acting on a record owned by someone else.
Maps to: HTTP 403 Forbidden, RPC success=false
"""

from typing import Any


class AccessDeniedError(Exception):
    def __init__(self, user_id: Any, resource: str):
        super().__init__(f"User {user_id} does not own {resource}")
        self.user_id = user_id
        self.resource = resource
