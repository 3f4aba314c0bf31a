"""Result monad for explicit error handling in board operations.

Board mutations that can be refused (blank titles, unknown columns,
deleting a column that still holds tasks) return a Result instead of
raising. The caller decides whether to surface the error to the user.

Example usage:
    >>> def rename(title: str) -> Result[str, str]:
    ...     if not title.strip():
    ...         return Err("Title must not be empty")
    ...     return Ok(title.strip())
    ...
    >>> result = rename("  Review  ")
    >>> if is_ok(result):
    ...     print(result.value)
    Review
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A refused or failed result.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Ok."""
    return isinstance(result, Ok)
