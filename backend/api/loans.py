"""
Loan API endpoints

Borrowing, returning and loan lookups.
"""
from fastapi import APIRouter, Depends
from typing import List

from constants import HTTPStatus, Pagination
from dependencies import get_lending_service
from dtos.request import BorrowRequest, ReturnRequest
from dtos.response import LoanListResponse, LoanResponse, OverdueSweepResponse
from services.lending_service import LendingService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.post("/borrow", response_model=LoanResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Borrow book")
def borrow_book(request: BorrowRequest, service: LendingService = Depends(get_lending_service)):
    """
    Lend a book.

    Returns 404 for an unknown book or borrower, 409 when the book is not
    available and 412 when the borrower's membership is not active.
    """
    return service.borrow_book(request.book_id, request.borrower_id, request.loan_period_days)


@router.post("/return", response_model=LoanResponse)
@handle_api_errors("Return book")
def return_book(request: ReturnRequest, service: LendingService = Depends(get_lending_service)):
    """Record a return. A loan held by someone else is reported as 404."""
    return service.return_book(request.book_id, request.borrower_id)


@router.get("/active", response_model=LoanListResponse)
@handle_api_errors("Get active loans")
def get_active_loans(
    borrower_id: str,
    page: int = Pagination.DEFAULT_PAGE,
    page_size: int = Pagination.DEFAULT_LOANS_PAGE_SIZE,
    service: LendingService = Depends(get_lending_service)
):
    return service.get_active_loans(borrower_id, page=page, page_size=page_size)


@router.get("/overdue", response_model=List[LoanResponse])
@handle_api_errors("Get overdue loans")
def get_overdue_loans(service: LendingService = Depends(get_lending_service)):
    return service.get_overdue_loans()


@router.post("/overdue/sweep", response_model=OverdueSweepResponse)
@handle_api_errors("Sweep overdue loans")
def sweep_overdue_loans(service: LendingService = Depends(get_lending_service)):
    """
    Flag Active loans that are past due right now as Overdue.

    Meant to be called by an external scheduler (cron or similar).
    """
    return service.sweep_overdue_loans()


@router.get("/{loan_id}", response_model=LoanResponse)
@handle_api_errors("Get loan")
def get_loan(loan_id: str, service: LendingService = Depends(get_lending_service)):
    return service.get_loan(loan_id)
