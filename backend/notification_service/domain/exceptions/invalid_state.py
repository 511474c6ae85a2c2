"""
InvalidStateTransition - Raised when a hub session is driven out of order.
"""


class InvalidStateTransition(Exception):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move hub session from {current} to {target}")
        self.current = current
        self.target = target
