"""
Translation of SQLAlchemy failures into application errors.
"""

import logging

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from constants import ErrorMessages
from exceptions import (
    ApplicationError,
    BookNotAvailableError,
    ConcurrencyError,
    ConflictError,
    DataAccessError,
    DuplicateEmailError,
    DuplicateIsbnError,
)

logger = logging.getLogger(__name__)

# Matched against the driver message: SQLite names table.column, PostgreSQL names the index
_ACTIVE_LOAN_MARKERS = ("uq_loans_active_book", "loans.book_id")
_ISBN_MARKERS = ("uq_books_isbn", "books.isbn")
_EMAIL_MARKERS = ("uq_borrowers_email", "borrowers.email")
_LOCK_MARKERS = ("database is locked", "could not serialize", "deadlock detected")


def _mentions(message: str, markers: tuple) -> bool:
    return any(marker in message for marker in markers)


def translate_db_error(exc: SQLAlchemyError, operation: str, book_id: str | None = None) -> ApplicationError:
    """
    Map a SQLAlchemy exception to the matching error kind.

    Args:
        exc: The exception raised by the session or engine
        operation: Short name of what was being attempted, for logs
        book_id: Book involved, used for the already-borrowed message

    Returns:
        The ApplicationError the caller should raise (``from exc``)
    """
    if isinstance(exc, StaleDataError):
        logger.warning(f"{operation} - stale row version: {exc}")
        return ConcurrencyError(ErrorMessages.CONCURRENT_UPDATE, {"operation": operation})

    if isinstance(exc, IntegrityError):
        message = str(exc.orig) if exc.orig is not None else str(exc)
        if _mentions(message, _ACTIVE_LOAN_MARKERS):
            logger.warning(f"{operation} - active loan already exists for book {book_id}")
            return BookNotAvailableError(
                book_id or "",
                f"Book with ID {book_id} is already borrowed" if book_id else "Book is already borrowed",
            )
        if _mentions(message, _ISBN_MARKERS):
            return DuplicateIsbnError()
        if _mentions(message, _EMAIL_MARKERS):
            return DuplicateEmailError()
        if "FOREIGN KEY" in message.upper():
            return ConflictError("The record is referenced by other records", {"operation": operation})

    if isinstance(exc, OperationalError):
        message = str(exc.orig) if exc.orig is not None else str(exc)
        if _mentions(message.lower(), _LOCK_MARKERS):
            logger.warning(f"{operation} - store busy: {message}")
            return ConcurrencyError(ErrorMessages.CONCURRENT_UPDATE, {"operation": operation})

    logger.error(f"{operation} - data access failure: {exc}", exc_info=exc)
    return DataAccessError(operation, cause=exc, message=ErrorMessages.DATA_ACCESS)
