"""Base class for board events.

The store hands ``BoardChanged`` records to its subscribers; the
automation engine produces one ``TaskAutoMoved`` per re-filed task.
Events are frozen: subscribers may keep them, never edit them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Identity and time of an event.

    Subclass fields need defaults, since the base fields have them.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
