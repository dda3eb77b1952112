"""
Loan Request DTOs

DTOs for borrow and return API requests.
"""

from pydantic import BaseModel, Field
from typing import Optional


class BorrowRequest(BaseModel):
    """
    Request DTO for lending a book.
    """

    book_id: str = Field(description="ID of the book to lend")
    borrower_id: str = Field(description="ID of the borrowing member")
    loan_period_days: Optional[int] = Field(
        None,
        description="Loan period in days; the configured default is used when omitted"
    )

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "book_id": "7d4f2a8e-3c1b-4e6a-9f0d-2b5c8a1e7f34",
                "borrower_id": "0a9e6c2d-5b7f-4d1e-8c3a-6f2b9d4e1a07",
                "loan_period_days": 14
            }
        }


class ReturnRequest(BaseModel):
    """
    Request DTO for returning a book. The borrower must hold the open loan.
    """

    book_id: str = Field(description="ID of the book being returned")
    borrower_id: str = Field(description="ID of the member returning it")
