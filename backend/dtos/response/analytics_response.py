"""
Analytics Response DTOs
"""

from pydantic import BaseModel, Field
from typing import List


class BorrowedBookStat(BaseModel):
    """A book and how many times it was borrowed and returned in the window."""

    book_id: str = Field(description="Book ID")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")
    isbn: str = Field(description="ISBN")
    category: str = Field(description="Catalog category")
    page_count: int = Field(description="Number of pages")
    borrow_count: int = Field(description="Completed loans in the window")


class BooksAnalyticsResponse(BaseModel):
    """
    Response DTO for the most-borrowed books query.
    """

    books: List[BorrowedBookStat] = Field(description="Books on this page, most borrowed first")
    total_count: int = Field(description="Number of distinct books borrowed in the window")
    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Page size used")
    has_next_page: bool = Field(description="Whether another page follows")


class BorrowerActivity(BaseModel):
    """Borrower id with a loan count. No personal data is exposed."""

    borrower_id: str = Field(description="Borrower ID")
    loan_count: int = Field(description="Completed loans in the window")


class BorrowersAnalyticsResponse(BaseModel):
    """
    Response DTO for the most-active borrowers query.
    """

    borrowers: List[BorrowerActivity] = Field(description="Borrowers on this page, most active first")
    total_count: int = Field(description="Number of distinct borrowers in the window")
    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Page size used")
    has_next_page: bool = Field(description="Whether another page follows")


class ReadingPaceResponse(BaseModel):
    """
    Response DTO for a borrower's estimated reading pace.
    """

    borrower_id: str = Field(description="Borrower ID")
    average_pages_per_day: float = Field(description="Mean pages per day, rounded to 2 decimals")
    loan_count_used: int = Field(description="Completed loans included in the average")
    has_sufficient_data: bool = Field(description="False when no usable loans exist")
    message: str = Field("", description="Explanation when data is insufficient")


class RecommendedBook(BaseModel):
    """A recommended book and its co-occurrence score."""

    book_id: str = Field(description="Book ID")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")
    isbn: str = Field(description="ISBN")
    category: str = Field(description="Catalog category")
    page_count: int = Field(description="Number of pages")
    co_occurrence: int = Field(description="Loans of this book by readers of the target book")


class BookRecommendationsResponse(BaseModel):
    """
    Response DTO for book-to-book recommendations.
    """

    book_id: str = Field(description="The book recommendations are based on")
    recommendations: List[RecommendedBook] = Field(description="Recommended books, best first")
