"""
Business Rules

Stateless predicates over the aggregates. Combine them with ordinary
boolean operators; the ``validate_*`` helpers raise the matching error
kind when a rule is broken.
"""

from datetime import timedelta
from typing import Iterable

from constants import FieldLimits, LoanPolicy
from exceptions import (
    BookNotAvailableError,
    BorrowerNotActiveError,
    LoanOperationError,
    LoanValidationError,
)
from domain.aggregates import Book, Borrower, Loan
from domain.value_objects import BookAvailability, LoanStatus, MemberStatus


def book_is_available(book: Book) -> bool:
    return book.availability is BookAvailability.AVAILABLE


def has_valid_page_count(book: Book) -> bool:
    return FieldLimits.MIN_PAGE_COUNT <= book.page_count <= FieldLimits.MAX_PAGE_COUNT


def borrower_is_active(borrower: Borrower) -> bool:
    return borrower.member_status is MemberStatus.ACTIVE


def loan_is_active(loan: Loan) -> bool:
    return loan.status is LoanStatus.ACTIVE


def loan_is_not_overdue(loan: Loan) -> bool:
    return not loan.is_overdue() and loan.status is not LoanStatus.OVERDUE


def loan_duration_days(loan: Loan) -> float:
    return (loan.due_date - loan.borrow_date).total_seconds() / 86400


def loan_period_within_standard(loan: Loan) -> bool:
    """
    Advisory check that the loan is within 14 +/- 14 days (1-28).

    Not enforced by Loan.create, which accepts 1-42 days.
    """
    days = loan_duration_days(loan)
    standard = LoanPolicy.STANDARD_LOAN_DAYS
    return 1 <= days and abs(days - standard) <= LoanPolicy.STANDARD_PERIOD_TOLERANCE_DAYS


def can_borrower_borrow(borrower: Borrower, active_loans: Iterable[Loan],
                        max_active: int = LoanPolicy.MAX_ACTIVE_LOANS_PER_BORROWER) -> bool:
    if not borrower_is_active(borrower):
        return False
    return len(list(active_loans)) < max_active


def is_book_available_for_borrowing(book: Book, active_loans: Iterable[Loan]) -> bool:
    if not book_is_available(book):
        return False
    return not any(loan.book_id == book.id and loan.is_active() for loan in active_loans)


def validate_book_borrowing(book: Book, borrower: Borrower) -> None:
    if not book_is_available(book):
        raise BookNotAvailableError(book.id)
    if not borrower_is_active(borrower):
        raise BorrowerNotActiveError(borrower.id)


def validate_book_returning(loan: Loan, book: Book, borrower: Borrower) -> None:
    if not loan.is_open():
        raise LoanOperationError("Only active loans can be returned", {"loan_id": loan.id})
    if loan.book_id != book.id:
        raise LoanOperationError("Loan does not belong to this book", {"loan_id": loan.id})
    if loan.borrower_id != borrower.id:
        raise LoanOperationError("Loan does not belong to this borrower", {"loan_id": loan.id})


def validate_loan_extension(loan: Loan, extension_days: int) -> None:
    if not loan_is_active(loan):
        raise LoanOperationError("Only active loans can be extended", {"loan_id": loan.id})
    if extension_days > LoanPolicy.MAX_EXTENSION_DAYS:
        raise LoanValidationError(
            f"Loan cannot be extended by more than {LoanPolicy.MAX_EXTENSION_DAYS} days",
            field="extension_days",
        )

    new_due_date = loan.due_date + timedelta(days=extension_days)
    total_days = (new_due_date - loan.borrow_date).total_seconds() / 86400
    if total_days > LoanPolicy.MAX_TOTAL_LOAN_DAYS:
        raise LoanValidationError(
            f"Total loan period cannot exceed {LoanPolicy.MAX_TOTAL_LOAN_DAYS} days",
            field="extension_days",
        )
