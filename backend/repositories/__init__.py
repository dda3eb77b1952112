"""
Repository layer for data access abstraction.

This package contains the store interfaces the services depend on and their
SQLAlchemy implementations, which map ORM rows to domain aggregates.
"""

from .base_repository import BaseRepository
from .book_repository import BookRepository
from .borrower_repository import BorrowerRepository
from .loan_repository import LoanRepository
from .interfaces import BookStore, BorrowerStore, LoanStore

__all__ = [
    "BaseRepository",
    "BookRepository",
    "BorrowerRepository",
    "LoanRepository",
    "BookStore",
    "BorrowerStore",
    "LoanStore",
]
