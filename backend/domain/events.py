"""
Domain Events

Notifications recorded on aggregates and drained after a successful commit.
Each event carries a stable ``event_type`` tag used by the dispatcher's
handler registry.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, ClassVar, Dict

from utils import clock


@dataclass(frozen=True)
class DomainEvent:
    event_type: ClassVar[str] = "domain_event"

    occurred_at: datetime = field(default_factory=lambda: clock.utcnow(), kw_only=True)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = self.event_type
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


@dataclass(frozen=True)
class BookCreated(DomainEvent):
    event_type: ClassVar[str] = "book_created"

    book_id: str


@dataclass(frozen=True)
class BookUpdated(DomainEvent):
    event_type: ClassVar[str] = "book_updated"

    book_id: str


@dataclass(frozen=True)
class BorrowerRegistered(DomainEvent):
    event_type: ClassVar[str] = "borrower_registered"

    borrower_id: str


@dataclass(frozen=True)
class BorrowerUpdated(DomainEvent):
    event_type: ClassVar[str] = "borrower_updated"

    borrower_id: str


@dataclass(frozen=True)
class BookBorrowed(DomainEvent):
    event_type: ClassVar[str] = "book_borrowed"

    loan_id: str
    book_id: str
    borrower_id: str


@dataclass(frozen=True)
class BookReturned(DomainEvent):
    event_type: ClassVar[str] = "book_returned"

    loan_id: str
    book_id: str
    borrower_id: str


ALL_EVENT_TYPES = (
    BookCreated,
    BookUpdated,
    BorrowerRegistered,
    BorrowerUpdated,
    BookBorrowed,
    BookReturned,
)
