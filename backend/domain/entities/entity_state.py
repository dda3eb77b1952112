"""
EntityState

Identity, timestamps, optimistic version and pending events shared by every
aggregate. Aggregates hold one of these as ``state`` instead of inheriting
from a base entity class.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from utils import clock
from domain.events import DomainEvent


def generate_id() -> str:
    return str(uuid.uuid4())


@dataclass
class EntityState:
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=lambda: clock.utcnow())
    updated_at: Optional[datetime] = None
    # Row version loaded from the store; None until the aggregate is first persisted
    version: Optional[int] = None
    _events: List[DomainEvent] = field(default_factory=list, repr=False, compare=False)

    @property
    def is_new(self) -> bool:
        return self.version is None

    def touch(self) -> None:
        """Bump updated_at to the current time."""
        self.updated_at = clock.utcnow()

    def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def pending_events(self) -> tuple:
        return tuple(self._events)

    def drain_events(self) -> List[DomainEvent]:
        """Return pending events and clear the buffer."""
        events = list(self._events)
        self._events.clear()
        return events

    def clear_events(self) -> None:
        self._events.clear()
