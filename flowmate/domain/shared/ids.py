"""Identifier and timestamp helpers shared by the domain models."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(UTC)


def generate_id(prefix: str) -> str:
    """Generate a prefixed random id.

    Examples:
        >>> generate_id("task").startswith("task-")
        True
    """
    return f"{prefix}-{uuid4().hex[:12]}"


def isoformat(moment: datetime) -> str:
    """Render a datetime as an ISO-8601 string with a trailing Z for UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    text = moment.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime; naive values are UTC.

    Returns None for empty or unparseable values.
    """
    if not text:
        return None
    try:
        moment = datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment
