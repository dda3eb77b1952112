"""
Loan Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from domain.aggregates import Loan


class LoanResponse(BaseModel):
    """
    Response DTO for a loan, including derived overdue figures.
    """

    id: str = Field(description="Loan ID")
    book_id: str = Field(description="Borrowed book ID")
    borrower_id: str = Field(description="Borrower ID")
    borrow_date: datetime = Field(description="When the book was borrowed (UTC)")
    due_date: datetime = Field(description="When the book is due (UTC)")
    return_date: Optional[datetime] = Field(None, description="When the book was returned (UTC)")
    status: str = Field(description="Active, Returned or Overdue")
    is_overdue: bool = Field(description="Still out and past due")
    days_overdue: int = Field(description="Whole days past due")
    overdue_fee: Decimal = Field(description="Accrued overdue fee")

    @classmethod
    def from_domain(cls, loan: Loan, daily_rate: Optional[Decimal] = None) -> "LoanResponse":
        fee = loan.calculate_overdue_fee() if daily_rate is None else loan.calculate_overdue_fee(daily_rate)
        return cls(
            id=loan.id,
            book_id=loan.book_id,
            borrower_id=loan.borrower_id,
            borrow_date=loan.borrow_date,
            due_date=loan.due_date,
            return_date=loan.return_date,
            status=loan.status.value,
            is_overdue=loan.is_overdue(),
            days_overdue=loan.days_overdue(),
            overdue_fee=fee,
        )


class LoanListResponse(BaseModel):
    """
    Response DTO for a page of loans.
    """

    loans: List[LoanResponse] = Field(description="Loans on this page")
    total_count: int = Field(description="Total number of matching loans")
    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Page size used")
    has_next_page: bool = Field(description="Whether another page follows")


class OverdueSweepResponse(BaseModel):
    """
    Result of flagging past-due loans as Overdue.
    """

    flagged_count: int = Field(description="Number of loans marked Overdue")
    loan_ids: List[str] = Field(default_factory=list, description="IDs of the flagged loans")
