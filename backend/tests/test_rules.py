"""
Tests for the business rule predicates.
"""

from datetime import timedelta

import pytest

from exceptions import BookNotAvailableError, BorrowerNotActiveError, LoanOperationError, LoanValidationError
from domain import rules
from domain.aggregates import Book, Borrower, Loan


@pytest.fixture
def book():
    return Book.create("Emma", "Jane Austen", "0141439580", 474, "Romance")


@pytest.fixture
def borrower():
    return Borrower.create_from_full_name("Fanny Price", "fanny@example.com")


def test_available_book_and_active_borrower_can_borrow(book, borrower):
    assert rules.book_is_available(book)
    assert rules.borrower_is_active(borrower)
    rules.validate_book_borrowing(book, borrower)


def test_unavailable_book_is_rejected_first(book, borrower):
    book.mark_as_borrowed()
    borrower.suspend()

    with pytest.raises(BookNotAvailableError):
        rules.validate_book_borrowing(book, borrower)


def test_inactive_borrower_is_rejected(book, borrower):
    borrower.deactivate()

    with pytest.raises(BorrowerNotActiveError):
        rules.validate_book_borrowing(book, borrower)


def test_active_loan_limit(borrower):
    loans = [Loan.create(f"book-{i}", borrower.id) for i in range(5)]

    assert rules.can_borrower_borrow(borrower, loans[:4])
    assert not rules.can_borrower_borrow(borrower, loans)
    assert rules.can_borrower_borrow(borrower, loans, max_active=6)


def test_book_with_active_loan_is_not_available_for_borrowing(book, borrower):
    loan = Loan.create(book.id, borrower.id)

    assert rules.is_book_available_for_borrowing(book, [])
    assert not rules.is_book_available_for_borrowing(book, [loan])


def test_loan_period_within_standard_is_advisory():
    assert rules.loan_period_within_standard(Loan.create("b", "r", 28))
    # Accepted by Loan.create but outside the standard window
    assert not rules.loan_period_within_standard(Loan.create("b", "r", 35))


def test_loan_is_not_overdue(frozen_now):
    loan = Loan.create("b", "r")
    assert rules.loan_is_not_overdue(loan)

    frozen_now.advance(days=15)
    assert not rules.loan_is_not_overdue(loan)


def test_validate_book_returning(book, borrower):
    loan = Loan.create(book.id, borrower.id)
    rules.validate_book_returning(loan, book, borrower)

    other = Borrower.create_from_full_name("Mary Crawford", "mary@example.com")
    with pytest.raises(LoanOperationError, match="this borrower"):
        rules.validate_book_returning(loan, book, other)


class TestLoanExtension:

    def test_extension_within_limits(self):
        rules.validate_loan_extension(Loan.create("b", "r", 14), 14)

    def test_extension_too_long(self):
        with pytest.raises(LoanValidationError, match="more than 14 days"):
            rules.validate_loan_extension(Loan.create("b", "r", 14), 15)

    def test_total_period_cap(self):
        with pytest.raises(LoanValidationError, match="cannot exceed 42 days"):
            rules.validate_loan_extension(Loan.create("b", "r", 35), 10)

    def test_returned_loan_cannot_be_extended(self):
        loan = Loan.create("b", "r")
        loan.return_book(loan.borrow_date + timedelta(days=1))

        with pytest.raises(LoanOperationError):
            rules.validate_loan_extension(loan, 1)
