"""
Borrower API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List, Optional

from constants import HTTPStatus, Pagination
from dependencies import get_borrower_service, get_lending_service
from dtos.request import MemberStatusRequest, RegisterBorrowerRequest, UpdateBorrowerRequest
from dtos.response import BorrowerListResponse, BorrowerResponse, LoanResponse
from services.borrower_service import BorrowerService
from services.lending_service import LendingService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.post("", response_model=BorrowerResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Register borrower")
def register_borrower(
    request: RegisterBorrowerRequest,
    service: BorrowerService = Depends(get_borrower_service)
):
    """Register a member. A duplicate email is rejected with 409."""
    return service.register_borrower(request.name, request.email, request.phone)


@router.get("", response_model=BorrowerListResponse)
@handle_api_errors("List borrowers")
def list_borrowers(
    page: int = Pagination.DEFAULT_PAGE,
    page_size: int = Pagination.DEFAULT_PAGE_SIZE,
    search: Optional[str] = None,
    status: Optional[str] = None,
    service: BorrowerService = Depends(get_borrower_service)
):
    return service.list_borrowers(page=page, page_size=page_size, search=search, status=status)


@router.get("/{borrower_id}", response_model=BorrowerResponse)
@handle_api_errors("Get borrower")
def get_borrower(borrower_id: str, service: BorrowerService = Depends(get_borrower_service)):
    return service.get_borrower(borrower_id)


@router.patch("/{borrower_id}", response_model=BorrowerResponse)
@handle_api_errors("Update borrower")
def update_borrower(
    borrower_id: str,
    request: UpdateBorrowerRequest,
    service: BorrowerService = Depends(get_borrower_service)
):
    """Partial update; omitted fields keep their current value."""
    return service.update_borrower(
        borrower_id,
        name=request.name,
        email=request.email,
        phone=request.phone,
        is_active=request.is_active,
    )


@router.put("/{borrower_id}/status", response_model=BorrowerResponse)
@handle_api_errors("Set member status")
def set_member_status(
    borrower_id: str,
    request: MemberStatusRequest,
    service: BorrowerService = Depends(get_borrower_service)
):
    return service.set_member_status(borrower_id, request.status)


@router.get("/{borrower_id}/loans", response_model=List[LoanResponse])
@handle_api_errors("Get loan history")
def get_loan_history(borrower_id: str, service: LendingService = Depends(get_lending_service)):
    """Every loan of the borrower, newest first."""
    return service.get_loan_history(borrower_id)
