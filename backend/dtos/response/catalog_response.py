"""
Catalog Response DTOs

DTOs for book and borrower API responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from domain.aggregates import Book, Borrower


class BookResponse(BaseModel):
    """
    Response DTO for a catalog entry.
    """

    id: str = Field(description="Book ID")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")
    isbn: str = Field(description="ISBN without hyphens or spaces")
    page_count: int = Field(description="Number of pages")
    category: str = Field(description="Catalog category")
    availability: str = Field(description="Available, Borrowed, Reserved or Maintenance")
    is_available: bool = Field(description="Whether the book can be borrowed now")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (UTC)")

    class Config:
        """Pydantic configuration."""
        from_attributes = True

    @classmethod
    def from_domain(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            page_count=book.page_count,
            category=book.category.value,
            availability=book.availability.value,
            is_available=book.is_available(),
            created_at=book.state.created_at,
            updated_at=book.state.updated_at,
        )


class BookListResponse(BaseModel):
    """
    Response DTO for a page of books.
    """

    books: List[BookResponse] = Field(description="Books on this page")
    total_count: int = Field(description="Total number of matching books")
    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Page size used")
    total_pages: int = Field(description="Number of pages")
    has_next_page: bool = Field(description="Whether another page follows")


class BorrowerResponse(BaseModel):
    """
    Response DTO for a library member.
    """

    id: str = Field(description="Borrower ID")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name (may be empty)")
    full_name: str = Field(description="Display name")
    email: str = Field(description="Lower-cased email address")
    phone: Optional[str] = Field(None, description="Phone number, digits only")
    registration_date: datetime = Field(description="Registration timestamp (UTC)")
    member_status: str = Field(description="Active, Inactive or Suspended")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (UTC)")

    class Config:
        """Pydantic configuration."""
        from_attributes = True

    @classmethod
    def from_domain(cls, borrower: Borrower) -> "BorrowerResponse":
        return cls(
            id=borrower.id,
            first_name=borrower.first_name,
            last_name=borrower.last_name,
            full_name=borrower.get_full_name(),
            email=borrower.email,
            phone=borrower.phone,
            registration_date=borrower.registration_date,
            member_status=borrower.member_status.value,
            created_at=borrower.state.created_at,
            updated_at=borrower.state.updated_at,
        )


class BorrowerListResponse(BaseModel):
    """
    Response DTO for a page of borrowers.
    """

    borrowers: List[BorrowerResponse] = Field(description="Borrowers on this page")
    total_count: int = Field(description="Total number of matching borrowers")
    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Page size used")
    total_pages: int = Field(description="Number of pages")
