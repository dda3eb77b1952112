"""
Book catalog API endpoints
"""
from fastapi import APIRouter, Depends, Response
from typing import List, Optional
import logging

from constants import HTTPStatus, Pagination
from dependencies import get_catalog_service
from dtos.request import CreateBookRequest, UpdateBookRequest
from dtos.response import BookListResponse, BookResponse
from services.catalog_service import CatalogService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=BookResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create book")
def create_book(request: CreateBookRequest, service: CatalogService = Depends(get_catalog_service)):
    """Add a book to the catalog. A duplicate ISBN is rejected with 409."""
    return service.create_book(
        title=request.title,
        author=request.author,
        isbn=request.isbn,
        page_count=request.page_count,
        category=request.category,
    )


@router.get("", response_model=BookListResponse)
@handle_api_errors("List books")
def list_books(
    page: int = Pagination.DEFAULT_PAGE,
    page_size: int = Pagination.DEFAULT_PAGE_SIZE,
    category: Optional[str] = None,
    search: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Page through the catalog.

    Paging values out of range are clamped, not rejected.
    """
    return service.list_books(page=page, page_size=page_size, category=category, search=search)


@router.get("/available", response_model=List[BookResponse])
@handle_api_errors("List available books")
def list_available_books(service: CatalogService = Depends(get_catalog_service)):
    return service.list_available_books()


@router.get("/isbn/{isbn}", response_model=BookResponse)
@handle_api_errors("Get book by ISBN")
def get_book_by_isbn(isbn: str, service: CatalogService = Depends(get_catalog_service)):
    return service.get_book_by_isbn(isbn)


@router.get("/{book_id}", response_model=BookResponse)
@handle_api_errors("Get book")
def get_book(book_id: str, service: CatalogService = Depends(get_catalog_service)):
    return service.get_book(book_id)


@router.put("/{book_id}", response_model=BookResponse)
@handle_api_errors("Update book")
def update_book(
    book_id: str,
    request: UpdateBookRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Update a book's details; ISBN cannot be changed."""
    return service.update_book(
        book_id,
        title=request.title,
        author=request.author,
        page_count=request.page_count,
        category=request.category,
        is_available=request.is_available,
    )


@router.delete("/{book_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete book")
def delete_book(book_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Remove a book that has never been lent."""
    service.delete_book(book_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
