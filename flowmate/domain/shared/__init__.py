"""Shared domain utilities for FlowMate.

This package provides common building blocks used across domain modules:

- Result monad for explicit error handling
- Base domain event infrastructure
- Id generation and the injectable clock type

Example usage:
    >>> from flowmate.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def find_column(column_id: str) -> Result[dict, str]:
    ...     if column_id == "missing":
    ...         return Err("Column not found")
    ...     return Ok({"id": column_id, "title": "To Do"})
"""

from flowmate.domain.shared.events import DomainEvent
from flowmate.domain.shared.ids import Clock, generate_id, isoformat, utc_now
from flowmate.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_ok,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    # Domain events
    "DomainEvent",
    # Ids and time
    "Clock",
    "generate_id",
    "isoformat",
    "utc_now",
]
