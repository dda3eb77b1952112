"""
Internal Analytics DTOs

Rows produced by the loan store's aggregate queries and consumed by the
analytics service.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MostBorrowedBookRow:
    """A book with the number of completed loans in a window."""

    book_id: str
    title: str
    author: str
    isbn: str
    category: str
    page_count: int
    borrow_count: int


@dataclass(frozen=True)
class BorrowerActivityRow:
    """Borrower id and completed-loan count. Carries no personal data."""

    borrower_id: str
    loan_count: int


@dataclass(frozen=True)
class CompletedLoanWithBook:
    """A returned loan joined with the page count of its book."""

    loan_id: str
    book_id: str
    title: str
    page_count: int
    borrow_date: datetime
    return_date: datetime


@dataclass(frozen=True)
class CoBorrowedBookRow:
    """A candidate recommendation and how many co-borrower loans point at it."""

    book_id: str
    title: str
    author: str
    isbn: str
    category: str
    page_count: int
    co_occurrence: int
