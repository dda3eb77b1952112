"""
Analytics Service - read-only aggregation over loan history

Provides:
- Most borrowed books in a date window
- Most active borrowers in a date window (ids and counts only)
- Reading pace estimate for a borrower
- Co-occurrence based book recommendations

Only Returned loans count as completed history.
"""
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Callable, List

from constants import Pagination
from exceptions import BookNotFoundError, ValidationError
from dtos.internal import CompletedLoanWithBook
from dtos.response import (
    BookRecommendationsResponse,
    BooksAnalyticsResponse,
    BorrowedBookStat,
    BorrowerActivity,
    BorrowersAnalyticsResponse,
    ReadingPaceResponse,
    RecommendedBook,
)
from services.interfaces import UnitOfWork
from services.pagination import has_next_page, validate_date_range, validate_paging

logger = logging.getLogger(__name__)

NO_COMPLETED_LOANS = "No completed loans found for this borrower"
NO_USABLE_LOANS = "Unable to calculate reading pace from completed loans"


def days_spent_reading(loan: CompletedLoanWithBook) -> int:
    """
    Calendar days between borrow and return.

    Same-day returns count as one day so the pace is always defined.
    """
    borrowed, returned = loan.borrow_date.date(), loan.return_date.date()
    if borrowed == returned:
        return 1
    return max(1, (returned - borrowed).days)


class AnalyticsService:
    """
    Service for lending analytics.

    Every query validates its inputs first and never mutates state.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def get_most_borrowed_books(
        self,
        start_date: datetime,
        end_date: datetime,
        page: int = 1,
        page_size: int = 10
    ) -> BooksAnalyticsResponse:
        """
        Books ranked by completed loans borrowed within [start_date, end_date].

        Ties are broken by title.

        Raises:
            ValidationError: If the window or paging is invalid
        """
        start, end = validate_date_range(start_date, end_date)
        validate_paging(page, page_size)

        with self._uow_factory() as uow:
            rows, total = uow.loans.get_most_borrowed_books(start, end, page, page_size)

        logger.info(f"Most borrowed books {start:%Y-%m-%d}..{end:%Y-%m-%d}: {len(rows)} of {total}")
        return BooksAnalyticsResponse(
            books=[
                BorrowedBookStat(
                    book_id=row.book_id,
                    title=row.title,
                    author=row.author,
                    isbn=row.isbn,
                    category=row.category,
                    page_count=row.page_count,
                    borrow_count=row.borrow_count,
                )
                for row in rows
            ],
            total_count=total,
            page=page,
            page_size=page_size,
            has_next_page=has_next_page(page, page_size, total),
        )

    def get_most_active_borrowers(
        self,
        start_date: datetime,
        end_date: datetime,
        page: int = 1,
        page_size: int = 10
    ) -> BorrowersAnalyticsResponse:
        """
        Borrowers ranked by completed loans borrowed within the window.

        Raises:
            ValidationError: If the window or paging is invalid
        """
        start, end = validate_date_range(start_date, end_date)
        validate_paging(page, page_size)

        with self._uow_factory() as uow:
            rows, total = uow.loans.get_most_active_borrowers(start, end, page, page_size)

        return BorrowersAnalyticsResponse(
            borrowers=[BorrowerActivity(borrower_id=row.borrower_id, loan_count=row.loan_count) for row in rows],
            total_count=total,
            page=page,
            page_size=page_size,
            has_next_page=has_next_page(page, page_size, total),
        )

    def estimate_reading_pace(self, borrower_id: str) -> ReadingPaceResponse:
        """
        Average pages per day over the borrower's completed loans.

        Reports insufficient data instead of failing when nothing usable exists.
        """
        if not borrower_id or not borrower_id.strip():
            raise ValidationError("Borrower ID cannot be empty", field="borrower_id")

        with self._uow_factory() as uow:
            completed = uow.loans.get_completed_loans_with_book_details(borrower_id)

        if not completed:
            return self._insufficient(borrower_id, NO_COMPLETED_LOANS)

        paces: List[Decimal] = []
        for loan in completed:
            if loan.page_count <= 0:
                continue
            days = days_spent_reading(loan)
            paces.append(Decimal(loan.page_count) / Decimal(days))
            logger.debug(f"Loan {loan.loan_id}: {loan.page_count} pages over {days} day(s)")

        if not paces:
            return self._insufficient(borrower_id, NO_USABLE_LOANS)

        average = (sum(paces) / Decimal(len(paces))).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
        return ReadingPaceResponse(
            borrower_id=borrower_id,
            average_pages_per_day=float(average),
            loan_count_used=len(paces),
            has_sufficient_data=True,
            message=f"Reading pace calculated from {len(paces)} completed loans",
        )

    @staticmethod
    def _insufficient(borrower_id: str, message: str) -> ReadingPaceResponse:
        logger.info(f"Reading pace for {borrower_id}: {message}")
        return ReadingPaceResponse(
            borrower_id=borrower_id,
            average_pages_per_day=0.0,
            loan_count_used=0,
            has_sufficient_data=False,
            message=message,
        )

    def get_book_recommendations(
        self,
        book_id: str,
        limit: int = Pagination.DEFAULT_RECOMMENDATIONS
    ) -> BookRecommendationsResponse:
        """
        Books also read by readers of ``book_id``.

        Candidates are books with Returned loans by anyone who returned the
        target book, ranked by how many such loans they have, then by title.

        Raises:
            ValidationError: If limit is outside 1-50
            BookNotFoundError: If the target book does not exist
        """
        if limit is None or limit <= 0 or limit > Pagination.MAX_RECOMMENDATIONS:
            raise ValidationError(
                f"Limit must be between 1 and {Pagination.MAX_RECOMMENDATIONS}", field="limit"
            )

        with self._uow_factory() as uow:
            if uow.books.get_by_id(book_id) is None:
                raise BookNotFoundError(book_id)

            readers = uow.loans.get_borrowers_who_borrowed(book_id)
            rows = uow.loans.get_books_borrowed_by(readers, book_id, limit) if readers else []

        return BookRecommendationsResponse(
            book_id=book_id,
            recommendations=[
                RecommendedBook(
                    book_id=row.book_id,
                    title=row.title,
                    author=row.author,
                    isbn=row.isbn,
                    category=row.category,
                    page_count=row.page_count,
                    co_occurrence=row.co_occurrence,
                )
                for row in rows
            ],
        )
