"""
Request DTOs

DTOs for incoming API requests. These decouple the API from the domain
aggregates and provide a clear contract for what data the API expects.
"""

from dtos.request.catalog_request import (
    CreateBookRequest,
    MemberStatusRequest,
    RegisterBorrowerRequest,
    UpdateBookRequest,
    UpdateBorrowerRequest,
)
from dtos.request.loan_request import BorrowRequest, ReturnRequest

__all__ = [
    "CreateBookRequest",
    "UpdateBookRequest",
    "RegisterBorrowerRequest",
    "UpdateBorrowerRequest",
    "MemberStatusRequest",
    "BorrowRequest",
    "ReturnRequest",
]
