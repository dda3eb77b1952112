"""
Response DTOs

DTOs for outgoing API responses. These decouple the API from the domain
aggregates and control exactly what data is exposed.
"""

from dtos.response.catalog_response import (
    BookListResponse,
    BookResponse,
    BorrowerListResponse,
    BorrowerResponse,
)
from dtos.response.loan_response import LoanListResponse, LoanResponse, OverdueSweepResponse
from dtos.response.analytics_response import (
    BookRecommendationsResponse,
    BooksAnalyticsResponse,
    BorrowedBookStat,
    BorrowerActivity,
    BorrowersAnalyticsResponse,
    ReadingPaceResponse,
    RecommendedBook,
)

__all__ = [
    "BookListResponse",
    "BookResponse",
    "BorrowerListResponse",
    "BorrowerResponse",
    "LoanListResponse",
    "LoanResponse",
    "OverdueSweepResponse",
    "BookRecommendationsResponse",
    "BooksAnalyticsResponse",
    "BorrowedBookStat",
    "BorrowerActivity",
    "BorrowersAnalyticsResponse",
    "ReadingPaceResponse",
    "RecommendedBook",
]
