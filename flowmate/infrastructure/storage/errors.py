"""Exceptions raised across the async persistence boundary.

Synchronous board conditions are values (see ``flowmate.domain.board.errors``);
these are for I/O that fails after the caller has moved on.
"""


class FlowMateError(Exception):
    """Base for FlowMate exceptions."""


class PersistenceError(FlowMateError):
    """A gateway call failed. In-memory state is never rolled back."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")
