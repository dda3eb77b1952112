"""
Unit of Work

Scopes one database transaction around a command. Borrow and return put
their loan write and book write in the same unit, so both commit together
or neither does.
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from repositories.book_repository import BookRepository
from repositories.borrower_repository import BorrowerRepository
from repositories.loan_repository import LoanRepository
from repositories.db_errors import translate_db_error
from services.interfaces import EventSink, UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over a SQLAlchemy session.

    Exiting the ``with`` block without ``commit()`` (including on
    cancellation or KeyboardInterrupt) rolls back. Store exceptions that
    escape the block are translated into application errors. Events of
    tracked aggregates are published only after a successful commit.
    """

    def __init__(self, session_factory: sessionmaker, event_sink: Optional[EventSink] = None):
        self._session_factory = session_factory
        self._event_sink = event_sink
        self.session: Optional[Session] = None
        self._tracked: List = []
        self._committed = False

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.books = BookRepository(self.session)
        self.borrowers = BorrowerRepository(self.session)
        self.loans = LoanRepository(self.session)
        self._tracked = []
        self._committed = False
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self.session.close()

        if isinstance(exc, SQLAlchemyError):
            raise translate_db_error(exc, "unit of work") from exc

    def track(self, *aggregates) -> None:
        self._tracked.extend(aggregates)

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_db_error(e, "commit") from e

        self._committed = True
        events = []
        for aggregate in self._tracked:
            events.extend(aggregate.drain_events())
        self._tracked.clear()

        if events and self._event_sink is not None:
            try:
                self._event_sink.publish(events)
            except Exception as e:
                # The change is committed; event delivery failures never propagate
                logger.error(f"Failed to publish {len(events)} domain event(s): {e}", exc_info=True)

    def rollback(self) -> None:
        try:
            self.session.rollback()
        finally:
            for aggregate in self._tracked:
                aggregate.clear_events()
            self._tracked.clear()


def make_uow_factory(session_factory: sessionmaker,
                     event_sink: Optional[EventSink] = None) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Return a zero-argument callable producing fresh units of work."""
    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory, event_sink)
    return factory
