"""
Store Interfaces

Abstract ports the lending services depend on. The SQLAlchemy repositories
in this package implement them; tests can substitute in-memory versions.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from domain.aggregates import Book, Borrower, Loan
from domain.value_objects import MemberStatus
from dtos.internal import (
    BorrowerActivityRow,
    CoBorrowedBookRow,
    CompletedLoanWithBook,
    MostBorrowedBookRow,
)


class BookStore(ABC):
    """Persistence port for Book aggregates."""

    @abstractmethod
    def get_by_id(self, book_id: str) -> Optional[Book]:
        pass

    @abstractmethod
    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """
        Look up a book by ISBN.

        Args:
            isbn: ISBN with or without hyphens/spaces
        """
        pass

    @abstractmethod
    def add(self, book: Book) -> Book:
        pass

    @abstractmethod
    def update(self, book: Book) -> Book:
        """
        Persist changes to an existing book.

        Raises:
            ConcurrencyError: If the stored version differs from the aggregate's
        """
        pass

    @abstractmethod
    def delete(self, book_id: str) -> bool:
        pass

    @abstractmethod
    def list_by_category(self, category: str) -> List[Book]:
        pass

    @abstractmethod
    def list_available(self) -> List[Book]:
        pass

    @abstractmethod
    def is_isbn_unique(self, isbn: str, exclude_id: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    def search(
        self,
        term: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Book], int]:
        """
        Page through books ordered by title.

        Args:
            term: Case-insensitive match on title, author, category or ISBN
            category: Exact category filter

        Returns:
            (books on the page, total matching count)
        """
        pass


class BorrowerStore(ABC):
    """Persistence port for Borrower aggregates."""

    @abstractmethod
    def get_by_id(self, borrower_id: str) -> Optional[Borrower]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Borrower]:
        pass

    @abstractmethod
    def add(self, borrower: Borrower) -> Borrower:
        pass

    @abstractmethod
    def update(self, borrower: Borrower) -> Borrower:
        pass

    @abstractmethod
    def delete(self, borrower_id: str) -> bool:
        pass

    @abstractmethod
    def is_email_unique(self, email: str, exclude_id: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    def filtered_search(
        self,
        term: Optional[str],
        status_filter: Optional[MemberStatus],
        page: int,
        page_size: int
    ) -> Tuple[List[Borrower], int]:
        """
        Page through borrowers ordered by last name, then first name.

        Args:
            term: Case-insensitive match on first name, last name, email or phone
            status_filter: Only borrowers with this membership status

        Returns:
            (borrowers on the page, total matching count)
        """
        pass


class LoanStore(ABC):
    """Persistence port for Loan aggregates and loan-history queries."""

    @abstractmethod
    def get_by_id(self, loan_id: str) -> Optional[Loan]:
        pass

    @abstractmethod
    def add(self, loan: Loan) -> Loan:
        """
        Raises:
            BookNotAvailableError: If the book already has an Active loan
        """
        pass

    @abstractmethod
    def update(self, loan: Loan) -> Loan:
        pass

    @abstractmethod
    def get_active_loan_for_book(self, book_id: str) -> Optional[Loan]:
        pass

    @abstractmethod
    def get_open_loan_for_book(self, book_id: str) -> Optional[Loan]:
        """Active loan, or an Overdue loan with no return date yet."""
        pass

    @abstractmethod
    def get_active_loans_for_borrower(
        self,
        borrower_id: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> List[Loan]:
        pass

    @abstractmethod
    def count_active_loans_for_borrower(self, borrower_id: str) -> int:
        pass

    @abstractmethod
    def get_overdue_loans(self, now: datetime) -> List[Loan]:
        """Active loans whose due date is before ``now``."""
        pass

    @abstractmethod
    def get_completed_loans_in_range(self, start: datetime, end: datetime) -> List[Loan]:
        pass

    @abstractmethod
    def get_loan_history_for_borrower(self, borrower_id: str) -> List[Loan]:
        pass

    @abstractmethod
    def has_loans_for_book(self, book_id: str) -> bool:
        pass

    @abstractmethod
    def get_borrowers_who_borrowed(self, book_id: str) -> List[str]:
        """Distinct ids of borrowers with a Returned loan of the book."""
        pass

    @abstractmethod
    def get_most_borrowed_books(
        self,
        start: datetime,
        end: datetime,
        page: int,
        page_size: int
    ) -> Tuple[List[MostBorrowedBookRow], int]:
        pass

    @abstractmethod
    def get_most_active_borrowers(
        self,
        start: datetime,
        end: datetime,
        page: int,
        page_size: int
    ) -> Tuple[List[BorrowerActivityRow], int]:
        pass

    @abstractmethod
    def get_completed_loans_with_book_details(self, borrower_id: str) -> List[CompletedLoanWithBook]:
        pass

    @abstractmethod
    def get_books_borrowed_by(
        self,
        borrower_ids: List[str],
        exclude_book_id: str,
        limit: int
    ) -> List[CoBorrowedBookRow]:
        """Books with Returned loans by the given borrowers, ranked by loan count."""
        pass
