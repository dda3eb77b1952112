"""
Book Aggregate

Catalog data plus the availability state machine.
"""

from dataclasses import dataclass, field

from exceptions import BookOperationError
from domain import validators
from domain.entities import EntityState
from domain.events import BookCreated, BookUpdated
from domain.value_objects import BookAvailability, BookCategory


@dataclass
class Book:
    """
    Aggregate root for a catalog entry.

    Mutate only through the methods below; the ISBN never changes after
    creation. Use ``Book.create`` for new books; the plain constructor is
    for rehydrating stored rows.
    """

    title: str
    author: str
    isbn: str
    page_count: int
    category: BookCategory
    availability: BookAvailability = BookAvailability.AVAILABLE
    state: EntityState = field(default_factory=EntityState)

    @property
    def id(self) -> str:
        return self.state.id

    @classmethod
    def create(cls, title: str, author: str, isbn: str, page_count: int, category: str) -> "Book":
        validators.validate_title(title)
        validators.validate_author(author)
        validators.validate_page_count(page_count)
        book_category = validators.validate_category(category)
        cleaned_isbn = validators.validate_isbn(isbn)

        book = cls(
            title=title,
            author=author,
            isbn=cleaned_isbn,
            page_count=page_count,
            category=book_category,
        )
        book.state.record(BookCreated(book_id=book.id))
        return book

    def update_details(self, title: str, author: str, page_count: int, category: str) -> None:
        validators.validate_title(title)
        validators.validate_author(author)
        validators.validate_page_count(page_count)
        book_category = validators.validate_category(category)

        self.title = title
        self.author = author
        self.page_count = page_count
        self.category = book_category

        self.state.touch()
        self.state.record(BookUpdated(book_id=self.id))

    def update_availability(self, availability: BookAvailability) -> None:
        """Set availability; a no-op when unchanged (no timestamp bump)."""
        if self.availability is availability:
            return
        self.availability = availability
        self.state.touch()

    def mark_as_available(self) -> None:
        self.update_availability(BookAvailability.AVAILABLE)

    def mark_as_borrowed(self) -> None:
        if self.availability is not BookAvailability.AVAILABLE:
            raise BookOperationError("Only available books can be borrowed", {"book_id": self.id})
        self.update_availability(BookAvailability.BORROWED)

    def mark_as_reserved(self) -> None:
        if self.availability is not BookAvailability.AVAILABLE:
            raise BookOperationError("Only available books can be reserved", {"book_id": self.id})
        self.update_availability(BookAvailability.RESERVED)

    def mark_under_maintenance(self) -> None:
        self.update_availability(BookAvailability.MAINTENANCE)

    def is_available(self) -> bool:
        return self.availability.is_lendable()

    def drain_events(self) -> list:
        return self.state.drain_events()

    def clear_events(self) -> None:
        self.state.clear_events()
