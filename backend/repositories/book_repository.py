"""
Book repository for catalog data access operations.
"""

from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models import Book as BookModel
from domain.aggregates import Book
from domain.entities import EntityState
from domain.validators import clean_isbn
from domain.value_objects import BookAvailability, BookCategory
from .base_repository import BaseRepository
from .interfaces import BookStore


class BookRepository(BaseRepository[BookModel, Book], BookStore):
    """Repository for Book aggregates."""

    def __init__(self, db: Session):
        super().__init__(db, BookModel)

    def _to_domain(self, row: BookModel) -> Book:
        return Book(
            title=row.title,
            author=row.author,
            isbn=row.isbn,
            page_count=row.page_count,
            category=BookCategory.from_string(row.category),
            availability=BookAvailability.from_string(row.availability),
            state=EntityState(
                id=row.id,
                created_at=row.created_at,
                updated_at=row.updated_at,
                version=row.version,
            ),
        )

    def _apply(self, book: Book, row: BookModel) -> None:
        row.title = book.title
        row.author = book.author
        row.isbn = book.isbn
        row.page_count = book.page_count
        row.category = book.category.value
        row.availability = book.availability.value

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        row = self.db.query(self.model).filter(self.model.isbn == clean_isbn(isbn)).first()
        return self._to_domain(row) if row is not None else None

    def list_by_category(self, category: str) -> List[Book]:
        rows = self.db.query(self.model).filter(
            self.model.category == category
        ).order_by(self.model.title).all()
        return [self._to_domain(row) for row in rows]

    def list_available(self) -> List[Book]:
        rows = self.db.query(self.model).filter(
            self.model.availability == BookAvailability.AVAILABLE.value
        ).order_by(self.model.title).all()
        return [self._to_domain(row) for row in rows]

    def list_all(self) -> List[Book]:
        rows = self.db.query(self.model).order_by(self.model.title).all()
        return [self._to_domain(row) for row in rows]

    def is_isbn_unique(self, isbn: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(self.model.id).filter(self.model.isbn == clean_isbn(isbn))
        if exclude_id:
            query = query.filter(self.model.id != exclude_id)
        return query.first() is None

    def search(
        self,
        term: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Book], int]:
        query = self.db.query(self.model)

        if category:
            query = query.filter(self.model.category == category)

        if term and term.strip():
            pattern = f"%{term.strip().lower()}%"
            query = query.filter(or_(
                func.lower(self.model.title).like(pattern),
                func.lower(self.model.author).like(pattern),
                func.lower(self.model.category).like(pattern),
                func.lower(self.model.isbn).like(pattern),
            ))

        total = query.count()
        rows = self._page(query.order_by(self.model.title, self.model.id), page, page_size)
        return [self._to_domain(row) for row in rows], total
