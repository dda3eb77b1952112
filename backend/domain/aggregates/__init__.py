"""
Domain Aggregates

Book, Borrower and Loan are independent consistency boundaries. A Loan
refers to its book and borrower by id only; loan history is read from the
loan store rather than held on the other aggregates.
"""

from domain.aggregates.book import Book
from domain.aggregates.borrower import Borrower
from domain.aggregates.loan import Loan

__all__ = ["Book", "Borrower", "Loan"]
