"""
EntityNotFoundError - A notification (or other record) id that does not exist.
Maps to: HTTP 404 Not Found, RPC success=false
"""

from typing import Any


class EntityNotFoundError(Exception):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
