"""
Loan Aggregate

The borrowing transaction that links a book to a borrower, with its status
state machine and overdue accounting.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from constants import LoanPolicy
from exceptions import LoanOperationError
from utils import clock
from domain import validators
from domain.entities import EntityState
from domain.events import BookBorrowed, BookReturned
from domain.value_objects import LoanStatus


@dataclass
class Loan:
    """
    Aggregate root for a single loan.

    ``book_id`` and ``borrower_id`` never change after creation. A loan is
    *open* while the book is still out: status Active, or status Overdue set
    by the sweep with no return recorded yet.
    """

    book_id: str
    borrower_id: str
    borrow_date: datetime
    due_date: datetime
    return_date: Optional[datetime] = None
    status: LoanStatus = LoanStatus.ACTIVE
    state: EntityState = field(default_factory=EntityState)

    @property
    def id(self) -> str:
        return self.state.id

    @classmethod
    def create(cls, book_id: str, borrower_id: str,
               loan_period_days: int = LoanPolicy.STANDARD_LOAN_DAYS) -> "Loan":
        validators.validate_loan_period(loan_period_days)

        state = EntityState()
        borrow_date = state.created_at
        loan = cls(
            book_id=book_id,
            borrower_id=borrower_id,
            borrow_date=borrow_date,
            due_date=borrow_date + timedelta(days=loan_period_days),
            state=state,
        )
        loan.state.record(BookBorrowed(loan_id=loan.id, book_id=book_id, borrower_id=borrower_id))
        return loan

    def return_book(self, return_date: Optional[datetime] = None) -> None:
        """
        Record the return.

        Status becomes Overdue when returned after the due date, Returned
        otherwise. A loan already flagged Overdue by the sweep keeps that
        status and just gets its return date.
        """
        if not self.is_open():
            raise LoanOperationError("Only active loans can be returned", {"loan_id": self.id})

        returned_at = return_date or clock.utcnow()
        if returned_at < self.borrow_date:
            raise LoanOperationError("Return date cannot be before borrow date", {"loan_id": self.id})

        self.return_date = returned_at
        if self.status is LoanStatus.ACTIVE:
            self.status = LoanStatus.OVERDUE if returned_at > self.due_date else LoanStatus.RETURNED

        self.state.touch()
        self.state.record(
            BookReturned(loan_id=self.id, book_id=self.book_id, borrower_id=self.borrower_id)
        )

    def mark_as_overdue(self) -> None:
        if self.status is not LoanStatus.ACTIVE:
            raise LoanOperationError("Only active loans can be marked as overdue", {"loan_id": self.id})
        if clock.utcnow() <= self.due_date:
            raise LoanOperationError("Loan is not yet overdue", {"loan_id": self.id})

        self.status = LoanStatus.OVERDUE
        self.state.touch()

    def is_overdue(self) -> bool:
        """Still Active and past due. Loans already flagged Overdue do not count."""
        return self.status is LoanStatus.ACTIVE and clock.utcnow() > self.due_date

    def is_returned(self) -> bool:
        """A return has been recorded; swept loans still out are not returned."""
        return self.return_date is not None

    def is_active(self) -> bool:
        return self.status is LoanStatus.ACTIVE

    def is_open(self) -> bool:
        if self.status is LoanStatus.ACTIVE:
            return True
        return self.status is LoanStatus.OVERDUE and self.return_date is None

    def days_overdue(self) -> int:
        if not self.is_overdue() and self.status is not LoanStatus.OVERDUE:
            return 0
        overdue_until = max(clock.utcnow(), self.due_date)
        return int((overdue_until - self.due_date).total_seconds() // 86400)

    def calculate_overdue_fee(self, daily_rate: Decimal = Decimal(LoanPolicy.DAILY_OVERDUE_FEE)) -> Decimal:
        """Whole calendar days past due times the daily rate; zero unless Overdue."""
        if self.status is not LoanStatus.OVERDUE:
            return Decimal("0.00")
        end = (self.return_date or clock.utcnow()).date()
        days_late = max(0, (end - self.due_date.date()).days)
        return (Decimal(days_late) * Decimal(daily_rate)).quantize(Decimal("0.01"))

    def drain_events(self) -> list:
        return self.state.drain_events()

    def clear_events(self) -> None:
        self.state.clear_events()
