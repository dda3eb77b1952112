"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

- BookCategory: closed set of catalog categories
- BookAvailability: lending state of a book
- MemberStatus: membership state of a borrower
- LoanStatus: lifecycle state of a loan
"""

from domain.value_objects.book_category import BookCategory
from domain.value_objects.book_availability import BookAvailability
from domain.value_objects.member_status import MemberStatus
from domain.value_objects.loan_status import LoanStatus

__all__ = ["BookCategory", "BookAvailability", "MemberStatus", "LoanStatus"]
