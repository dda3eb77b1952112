"""
Internal DTOs

Rows passed between the repositories and the services.
These are not exposed to external APIs.
"""

from dtos.internal.analytics_rows import (
    BorrowerActivityRow,
    CoBorrowedBookRow,
    CompletedLoanWithBook,
    MostBorrowedBookRow,
)

__all__ = [
    "BorrowerActivityRow",
    "CoBorrowedBookRow",
    "CompletedLoanWithBook",
    "MostBorrowedBookRow",
]
