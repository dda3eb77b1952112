"""
Lending Service

The borrow/return workflow. Each command loads the aggregates it needs in
one unit of work, mutates them through their own methods and commits the
loan write and the book write together.

At most one Active loan per book is guaranteed by the store: the loan
table carries a unique index on book_id filtered to Active rows, so a
borrow that races past the in-transaction check still fails on insert.
"""

import logging
from decimal import Decimal
from typing import Callable, List, Optional

from constants import LoanPolicy, Pagination
from exceptions import (
    BookNotAvailableError,
    BookNotFoundError,
    BorrowerNotActiveError,
    BorrowerNotFoundError,
    LoanNotFoundError,
)
from domain import rules
from domain.aggregates import Loan
from dtos.response import LoanListResponse, LoanResponse, OverdueSweepResponse
from services.interfaces import UnitOfWork
from services.pagination import has_next_page, validate_paging
from utils import clock
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class LendingService:
    """Service for borrowing, returning and loan queries."""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        default_loan_days: int = LoanPolicy.STANDARD_LOAN_DAYS,
        daily_overdue_fee: Decimal = Decimal(LoanPolicy.DAILY_OVERDUE_FEE)
    ):
        """
        Args:
            uow_factory: Callable returning a fresh unit of work per call
            default_loan_days: Loan period used when a borrow does not give one
            daily_overdue_fee: Rate used for fees in loan responses
        """
        self._uow_factory = uow_factory
        self._default_loan_days = default_loan_days
        self._daily_overdue_fee = daily_overdue_fee

    def _to_response(self, loan: Loan) -> LoanResponse:
        return LoanResponse.from_domain(loan, self._daily_overdue_fee)

    @log_operation("borrow_book")
    def borrow_book(self, book_id: str, borrower_id: str,
                    loan_period_days: Optional[int] = None) -> LoanResponse:
        """
        Lend a book to a borrower.

        Raises:
            BookNotFoundError: If the book does not exist
            BookNotAvailableError: If the book is not Available or already has an Active loan
            BorrowerNotFoundError: If the borrower does not exist
            BorrowerNotActiveError: If the borrower's membership is not Active
            LoanValidationError: If the loan period is out of range
        """
        period = loan_period_days if loan_period_days is not None else self._default_loan_days

        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            if not rules.book_is_available(book):
                raise BookNotAvailableError(book_id)

            borrower = uow.borrowers.get_by_id(borrower_id)
            if borrower is None:
                raise BorrowerNotFoundError(borrower_id)
            if not rules.borrower_is_active(borrower):
                raise BorrowerNotActiveError(borrower_id)

            # Authoritative check against the loan table, not the book flag
            if uow.loans.get_active_loan_for_book(book_id) is not None:
                raise BookNotAvailableError(book_id, f"Book with ID {book_id} is already borrowed")

            loan = Loan.create(book_id, borrower_id, period)
            book.mark_as_borrowed()

            uow.loans.add(loan)
            uow.books.update(book)
            uow.track(loan, book)
            uow.commit()

        logger.info(f"Book {book_id} borrowed by {borrower_id}, due {loan.due_date:%Y-%m-%d}")
        return self._to_response(loan)

    @log_operation("return_book")
    def return_book(self, book_id: str, borrower_id: str) -> LoanResponse:
        """
        Record the return of a book by the borrower who holds it.

        A loan held by someone else is reported exactly like a missing loan.

        Raises:
            LoanNotFoundError: If the book has no open loan for this borrower
            BookNotFoundError: If the book does not exist
        """
        with self._uow_factory() as uow:
            loan = uow.loans.get_open_loan_for_book(book_id)
            if loan is None:
                raise LoanNotFoundError(f"No active loan found for book {book_id}", {"book_id": book_id})
            if loan.borrower_id != borrower_id:
                raise LoanNotFoundError("Loan belongs to different borrower", {"book_id": book_id})

            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)

            loan.return_book()
            book.mark_as_available()

            uow.loans.update(loan)
            uow.books.update(book)
            uow.track(loan, book)
            uow.commit()

        logger.info(f"Book {book_id} returned, loan {loan.id} is {loan.status.value}")
        return self._to_response(loan)

    def get_active_loans(self, borrower_id: str, page: int = 1,
                         page_size: int = Pagination.DEFAULT_LOANS_PAGE_SIZE) -> LoanListResponse:
        """
        Page through a borrower's Active loans, soonest due first.

        Raises:
            ValidationError: If page or page_size is out of range
        """
        validate_paging(page, page_size)
        with self._uow_factory() as uow:
            total = uow.loans.count_active_loans_for_borrower(borrower_id)
            loans = uow.loans.get_active_loans_for_borrower(borrower_id, page, page_size)

        return LoanListResponse(
            loans=[self._to_response(loan) for loan in loans],
            total_count=total,
            page=page,
            page_size=page_size,
            has_next_page=has_next_page(page, page_size, total),
        )

    def get_loan(self, loan_id: str) -> LoanResponse:
        with self._uow_factory() as uow:
            loan = uow.loans.get_by_id(loan_id)
        if loan is None:
            raise LoanNotFoundError(f"Loan with ID {loan_id} not found", {"loan_id": loan_id})
        return self._to_response(loan)

    def get_loan_history(self, borrower_id: str) -> List[LoanResponse]:
        """All loans of a borrower, newest first."""
        with self._uow_factory() as uow:
            if uow.borrowers.get_by_id(borrower_id) is None:
                raise BorrowerNotFoundError(borrower_id)
            loans = uow.loans.get_loan_history_for_borrower(borrower_id)
        return [self._to_response(loan) for loan in loans]

    def get_overdue_loans(self) -> List[LoanResponse]:
        """Active loans that are past due and not yet flagged."""
        with self._uow_factory() as uow:
            loans = uow.loans.get_overdue_loans(clock.utcnow())
        return [self._to_response(loan) for loan in loans]

    @log_operation("sweep_overdue_loans")
    def sweep_overdue_loans(self) -> OverdueSweepResponse:
        """
        Flag every Active loan that is past due as of the current time as Overdue.

        Intended for an external scheduler; nothing in the service runs it
        periodically.
        """
        with self._uow_factory() as uow:
            loans = uow.loans.get_overdue_loans(clock.utcnow())
            for loan in loans:
                loan.mark_as_overdue()
                uow.loans.update(loan)
            uow.track(*loans)
            uow.commit()

        if loans:
            logger.info(f"Marked {len(loans)} loan(s) as overdue")
        return OverdueSweepResponse(flagged_count=len(loans), loan_ids=[loan.id for loan in loans])
