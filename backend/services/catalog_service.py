"""
Catalog Service

Creates, updates, reads and lists books.
"""

import logging
from typing import Callable, List, Optional

from exceptions import BookNotFoundError, ConflictError, DuplicateIsbnError
from domain.aggregates import Book
from domain.validators import validate_isbn
from dtos.response import BookListResponse, BookResponse
from services.interfaces import UnitOfWork
from services.pagination import has_next_page, normalize_paging, total_pages
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for catalog (book) commands and queries."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        """
        Args:
            uow_factory: Callable returning a fresh unit of work per call
        """
        self._uow_factory = uow_factory

    @log_operation("create_book")
    def create_book(self, title: str, author: str, isbn: str, page_count: int, category: str) -> BookResponse:
        """
        Add a book to the catalog.

        Raises:
            BookValidationError: If any field is invalid
            DuplicateIsbnError: If another book already has this ISBN
        """
        cleaned_isbn = validate_isbn(isbn)
        with self._uow_factory() as uow:
            if not uow.books.is_isbn_unique(cleaned_isbn):
                raise DuplicateIsbnError()

            book = Book.create(title, author, isbn, page_count, category)
            uow.books.add(book)
            uow.track(book)
            uow.commit()

        logger.info(f"Created book {book.id} ({book.category.value})")
        return BookResponse.from_domain(book)

    @log_operation("update_book")
    def update_book(
        self,
        book_id: str,
        title: str,
        author: str,
        page_count: int,
        category: str,
        is_available: Optional[bool] = None
    ) -> BookResponse:
        """
        Update a book's details and optionally override its availability.

        ``is_available=True`` puts the book back on the shelf; it is refused
        while the book has an open loan (return it instead). ``False`` moves
        an available book to Maintenance. ``None`` leaves availability alone.

        Raises:
            BookNotFoundError: If the book does not exist
            BookValidationError: If any field is invalid
            ConflictError: If marking available while a loan is open
        """
        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)

            book.update_details(title, author, page_count, category)

            if is_available is True and not book.is_available():
                if uow.loans.get_open_loan_for_book(book_id) is not None:
                    raise ConflictError(
                        f"Book with ID {book_id} has an active loan and must be returned first",
                        {"book_id": book_id},
                    )
                book.mark_as_available()
            elif is_available is False and book.is_available():
                book.mark_under_maintenance()

            uow.books.update(book)
            uow.track(book)
            uow.commit()

        return BookResponse.from_domain(book)

    def get_book(self, book_id: str) -> BookResponse:
        """
        Raises:
            BookNotFoundError: If the book does not exist
        """
        with self._uow_factory() as uow:
            book = uow.books.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return BookResponse.from_domain(book)

    def get_book_by_isbn(self, isbn: str) -> BookResponse:
        with self._uow_factory() as uow:
            book = uow.books.get_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return BookResponse.from_domain(book)

    def list_books(
        self,
        page: int = 1,
        page_size: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None
    ) -> BookListResponse:
        """
        Page through the catalog ordered by title.

        Out-of-range paging is clamped rather than rejected.
        """
        page, page_size = normalize_paging(page, page_size)
        with self._uow_factory() as uow:
            books, total = uow.books.search(term=search, category=category, page=page, page_size=page_size)

        return BookListResponse(
            books=[BookResponse.from_domain(book) for book in books],
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
            has_next_page=has_next_page(page, page_size, total),
        )

    def list_available_books(self) -> List[BookResponse]:
        with self._uow_factory() as uow:
            books = uow.books.list_available()
        return [BookResponse.from_domain(book) for book in books]

    def list_books_by_category(self, category: str) -> List[BookResponse]:
        with self._uow_factory() as uow:
            books = uow.books.list_by_category(category)
        return [BookResponse.from_domain(book) for book in books]

    @log_operation("delete_book")
    def delete_book(self, book_id: str) -> None:
        """
        Remove a book that has never been lent.

        Raises:
            BookNotFoundError: If the book does not exist
            ConflictError: If any loan references the book
        """
        with self._uow_factory() as uow:
            if not uow.books.exists(book_id):
                raise BookNotFoundError(book_id)
            if uow.loans.has_loans_for_book(book_id):
                raise ConflictError(
                    f"Book with ID {book_id} has loan history and cannot be deleted",
                    {"book_id": book_id},
                )
            uow.books.delete(book_id)
            uow.commit()
