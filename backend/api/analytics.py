"""
Analytics API endpoints

Read-only reports over completed loans.
"""
from fastapi import APIRouter, Depends
from datetime import datetime

from constants import Pagination
from dependencies import get_analytics_service
from dtos.response import (
    BookRecommendationsResponse,
    BooksAnalyticsResponse,
    BorrowersAnalyticsResponse,
    ReadingPaceResponse,
)
from services.analytics_service import AnalyticsService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/books/most-borrowed", response_model=BooksAnalyticsResponse)
@handle_api_errors("Get most borrowed books")
def get_most_borrowed_books(
    start_date: datetime,
    end_date: datetime,
    page: int = Pagination.DEFAULT_PAGE,
    page_size: int = Pagination.DEFAULT_LOANS_PAGE_SIZE,
    service: AnalyticsService = Depends(get_analytics_service)
):
    """
    Books ranked by Returned loans borrowed within the window.

    Both bounds are inclusive and must not lie in the future.
    """
    return service.get_most_borrowed_books(start_date, end_date, page, page_size)


@router.get("/borrowers/most-active", response_model=BorrowersAnalyticsResponse)
@handle_api_errors("Get most active borrowers")
def get_most_active_borrowers(
    start_date: datetime,
    end_date: datetime,
    page: int = Pagination.DEFAULT_PAGE,
    page_size: int = Pagination.DEFAULT_LOANS_PAGE_SIZE,
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.get_most_active_borrowers(start_date, end_date, page, page_size)


@router.get("/borrowers/{borrower_id}/reading-pace", response_model=ReadingPaceResponse)
@handle_api_errors("Estimate reading pace")
def estimate_reading_pace(borrower_id: str, service: AnalyticsService = Depends(get_analytics_service)):
    return service.estimate_reading_pace(borrower_id)


@router.get("/books/{book_id}/recommendations", response_model=BookRecommendationsResponse)
@handle_api_errors("Get book recommendations")
def get_book_recommendations(
    book_id: str,
    limit: int = Pagination.DEFAULT_RECOMMENDATIONS,
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Books most often read by the readers of this book."""
    return service.get_book_recommendations(book_id, limit)
