"""
Loan repository for loan data access and loan-history aggregation.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Book as BookModel, Loan as LoanModel
from domain.aggregates import Loan
from domain.entities import EntityState
from domain.value_objects import LoanStatus
from dtos.internal import (
    BorrowerActivityRow,
    CoBorrowedBookRow,
    CompletedLoanWithBook,
    MostBorrowedBookRow,
)
from .base_repository import BaseRepository
from .interfaces import LoanStore

ACTIVE = LoanStatus.ACTIVE.value
RETURNED = LoanStatus.RETURNED.value
OVERDUE = LoanStatus.OVERDUE.value


class LoanRepository(BaseRepository[LoanModel, Loan], LoanStore):
    """Repository for Loan aggregates."""

    def __init__(self, db: Session):
        super().__init__(db, LoanModel)

    def _to_domain(self, row: LoanModel) -> Loan:
        return Loan(
            book_id=row.book_id,
            borrower_id=row.borrower_id,
            borrow_date=row.borrow_date,
            due_date=row.due_date,
            return_date=row.return_date,
            status=LoanStatus.from_string(row.status),
            state=EntityState(
                id=row.id,
                created_at=row.created_at,
                updated_at=row.updated_at,
                version=row.version,
            ),
        )

    def _apply(self, loan: Loan, row: LoanModel) -> None:
        row.book_id = loan.book_id
        row.borrower_id = loan.borrower_id
        row.borrow_date = loan.borrow_date
        row.due_date = loan.due_date
        row.return_date = loan.return_date
        row.status = loan.status.value

    def _to_domain_list(self, rows: List[LoanModel]) -> List[Loan]:
        return [self._to_domain(row) for row in rows]

    def add(self, loan: Loan, **context) -> Loan:
        context.setdefault("book_id", loan.book_id)
        return super().add(loan, **context)

    def update(self, loan: Loan, **context) -> Loan:
        context.setdefault("book_id", loan.book_id)
        return super().update(loan, **context)

    # Lookups

    def get_active_loan_for_book(self, book_id: str) -> Optional[Loan]:
        row = self.db.query(self.model).filter(
            self.model.book_id == book_id,
            self.model.status == ACTIVE
        ).first()
        return self._to_domain(row) if row is not None else None

    def get_open_loan_for_book(self, book_id: str) -> Optional[Loan]:
        row = self.db.query(self.model).filter(
            self.model.book_id == book_id,
            self.model.return_date.is_(None),
            self.model.status.in_([ACTIVE, OVERDUE])
        ).order_by(self.model.borrow_date.desc()).first()
        return self._to_domain(row) if row is not None else None

    def get_active_loans_for_borrower(
        self,
        borrower_id: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> List[Loan]:
        query = self.db.query(self.model).filter(
            self.model.borrower_id == borrower_id,
            self.model.status == ACTIVE
        ).order_by(self.model.due_date, self.model.id)

        if page and page_size:
            return self._to_domain_list(self._page(query, page, page_size))
        return self._to_domain_list(query.all())

    def count_active_loans_for_borrower(self, borrower_id: str) -> int:
        return self.db.query(self.model).filter(
            self.model.borrower_id == borrower_id,
            self.model.status == ACTIVE
        ).count()

    def get_overdue_loans(self, now: datetime) -> List[Loan]:
        rows = self.db.query(self.model).filter(
            self.model.status == ACTIVE,
            self.model.due_date < now
        ).order_by(self.model.due_date).all()
        return self._to_domain_list(rows)

    def get_completed_loans_in_range(self, start: datetime, end: datetime) -> List[Loan]:
        rows = self.db.query(self.model).filter(
            self.model.status == RETURNED,
            self.model.borrow_date >= start,
            self.model.borrow_date <= end
        ).order_by(self.model.borrow_date).all()
        return self._to_domain_list(rows)

    def get_loan_history_for_borrower(self, borrower_id: str) -> List[Loan]:
        rows = self.db.query(self.model).filter(
            self.model.borrower_id == borrower_id
        ).order_by(self.model.borrow_date.desc()).all()
        return self._to_domain_list(rows)

    def has_loans_for_book(self, book_id: str) -> bool:
        return self.db.query(self.model.id).filter(self.model.book_id == book_id).first() is not None

    def get_borrowers_who_borrowed(self, book_id: str) -> List[str]:
        rows = self.db.query(self.model.borrower_id).filter(
            self.model.book_id == book_id,
            self.model.status == RETURNED
        ).distinct().all()
        return [row.borrower_id for row in rows]

    # Aggregations

    def get_most_borrowed_books(
        self,
        start: datetime,
        end: datetime,
        page: int,
        page_size: int
    ) -> Tuple[List[MostBorrowedBookRow], int]:
        borrow_count = func.count(self.model.id).label("borrow_count")
        query = self.db.query(
            BookModel.id,
            BookModel.title,
            BookModel.author,
            BookModel.isbn,
            BookModel.category,
            BookModel.page_count,
            borrow_count,
        ).select_from(self.model).join(
            BookModel, BookModel.id == self.model.book_id
        ).filter(
            self.model.status == RETURNED,
            self.model.borrow_date >= start,
            self.model.borrow_date <= end
        ).group_by(
            BookModel.id,
            BookModel.title,
            BookModel.author,
            BookModel.isbn,
            BookModel.category,
            BookModel.page_count,
        )

        total = query.count()
        rows = self._page(query.order_by(borrow_count.desc(), BookModel.title, BookModel.id), page, page_size)
        return [
            MostBorrowedBookRow(
                book_id=row.id,
                title=row.title,
                author=row.author,
                isbn=row.isbn,
                category=row.category,
                page_count=row.page_count,
                borrow_count=row.borrow_count,
            )
            for row in rows
        ], total

    def get_most_active_borrowers(
        self,
        start: datetime,
        end: datetime,
        page: int,
        page_size: int
    ) -> Tuple[List[BorrowerActivityRow], int]:
        loan_count = func.count(self.model.id).label("loan_count")
        query = self.db.query(self.model.borrower_id, loan_count).filter(
            self.model.status == RETURNED,
            self.model.borrow_date >= start,
            self.model.borrow_date <= end
        ).group_by(self.model.borrower_id)

        total = query.count()
        rows = self._page(query.order_by(loan_count.desc(), self.model.borrower_id), page, page_size)
        return [
            BorrowerActivityRow(borrower_id=row.borrower_id, loan_count=row.loan_count)
            for row in rows
        ], total

    def get_completed_loans_with_book_details(self, borrower_id: str) -> List[CompletedLoanWithBook]:
        rows = self.db.query(
            self.model.id,
            self.model.book_id,
            BookModel.title,
            BookModel.page_count,
            self.model.borrow_date,
            self.model.return_date,
        ).join(
            BookModel, BookModel.id == self.model.book_id
        ).filter(
            self.model.borrower_id == borrower_id,
            self.model.status == RETURNED,
            self.model.return_date.isnot(None)
        ).order_by(self.model.return_date).all()

        return [
            CompletedLoanWithBook(
                loan_id=row.id,
                book_id=row.book_id,
                title=row.title,
                page_count=row.page_count,
                borrow_date=row.borrow_date,
                return_date=row.return_date,
            )
            for row in rows
        ]

    def get_books_borrowed_by(
        self,
        borrower_ids: List[str],
        exclude_book_id: str,
        limit: int
    ) -> List[CoBorrowedBookRow]:
        if not borrower_ids:
            return []

        co_occurrence = func.count(self.model.id).label("co_occurrence")
        rows = self.db.query(
            BookModel.id,
            BookModel.title,
            BookModel.author,
            BookModel.isbn,
            BookModel.category,
            BookModel.page_count,
            co_occurrence,
        ).select_from(self.model).join(
            BookModel, BookModel.id == self.model.book_id
        ).filter(
            self.model.borrower_id.in_(borrower_ids),
            self.model.book_id != exclude_book_id,
            self.model.status == RETURNED
        ).group_by(
            BookModel.id,
            BookModel.title,
            BookModel.author,
            BookModel.isbn,
            BookModel.category,
            BookModel.page_count,
        ).order_by(
            co_occurrence.desc(), BookModel.title, BookModel.id
        ).limit(limit).all()

        return [
            CoBorrowedBookRow(
                book_id=row.id,
                title=row.title,
                author=row.author,
                isbn=row.isbn,
                category=row.category,
                page_count=row.page_count,
                co_occurrence=row.co_occurrence,
            )
            for row in rows
        ]
