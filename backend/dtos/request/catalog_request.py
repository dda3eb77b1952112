"""
Catalog Request DTOs

DTOs for book and borrower API requests.

Field rules (lengths, formats, categories) are enforced by the domain so
the API reports them as 400 with the domain's message; these models only
fix the shape of the payload.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


class CreateBookRequest(BaseModel):
    """
    Request DTO for adding a book to the catalog.
    """

    title: str = Field(description="Book title (max 200 characters)")
    author: str = Field(description="Author name (max 100 characters)")
    isbn: str = Field(description="ISBN-10 or ISBN-13; hyphens and spaces are ignored")
    page_count: int = Field(description="Number of pages (1-10,000)")
    category: str = Field(description="Catalog category, e.g. Fiction or Science")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "title": "The Pragmatic Programmer",
                "author": "David Thomas",
                "isbn": "978-0135957059",
                "page_count": 352,
                "category": "Technology"
            }
        }


class UpdateBookRequest(BaseModel):
    """
    Request DTO for editing a book.

    ``is_available`` is optional: omit it to leave availability unchanged.
    """

    title: str = Field(description="Book title")
    author: str = Field(description="Author name")
    page_count: int = Field(description="Number of pages")
    category: str = Field(description="Catalog category")
    is_available: Optional[bool] = Field(None, description="Put back on the shelf (true) or into maintenance (false)")


class RegisterBorrowerRequest(BaseModel):
    """
    Request DTO for registering a borrower.

    The full name is split on the first space into first and last name.
    """

    name: str = Field(description="Full name")
    email: str = Field(description="Email address, unique per borrower")
    phone: Optional[str] = Field(None, description="Phone number with 10-15 digits")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "phone": "+44 20 7946 0018"
            }
        }


class UpdateBorrowerRequest(BaseModel):
    """
    Request DTO for a partial borrower update. Omitted fields are unchanged.
    """

    name: Optional[str] = Field(None, description="New full name")
    email: Optional[str] = Field(None, description="New email address")
    phone: Optional[str] = Field(None, description="New phone number")
    is_active: Optional[bool] = Field(None, description="Activate (true) or deactivate (false)")


class MemberStatusRequest(BaseModel):
    """
    Request DTO for changing a borrower's membership status.
    """

    status: str = Field(description="Active, Inactive or Suspended")

    @field_validator("status")
    @classmethod
    def strip_status(cls, v):
        """Tolerate surrounding whitespace."""
        return v.strip()
