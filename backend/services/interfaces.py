"""
Service Interfaces

Abstract base classes the lending services depend on, so the event sink and
the unit of work can be swapped for tests or other stores.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from domain.events import DomainEvent


class EventSink(ABC):
    """
    Receives domain events drained from aggregates after a successful commit.

    Delivery is best-effort and outside the consistency boundary: a failing
    sink never undoes a committed change.
    """

    @abstractmethod
    def publish(self, events: Iterable[DomainEvent]) -> None:
        """
        Deliver events in the order they were recorded.

        Args:
            events: Drained domain events
        """
        pass


class UnitOfWork(ABC):
    """
    One transaction over the book, borrower and loan stores.

    Usage:
        with uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
            ...
            uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    books = None
    borrowers = None
    loans = None

    @abstractmethod
    def __enter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        pass

    @abstractmethod
    def track(self, *aggregates) -> None:
        """Register aggregates whose events are published after commit."""
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
