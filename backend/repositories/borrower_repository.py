"""
Borrower repository for member data access operations.
"""

from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models import Borrower as BorrowerModel
from domain.aggregates import Borrower
from domain.entities import EntityState
from domain.value_objects import MemberStatus
from .base_repository import BaseRepository
from .interfaces import BorrowerStore


class BorrowerRepository(BaseRepository[BorrowerModel, Borrower], BorrowerStore):
    """Repository for Borrower aggregates."""

    def __init__(self, db: Session):
        super().__init__(db, BorrowerModel)

    def _to_domain(self, row: BorrowerModel) -> Borrower:
        return Borrower(
            first_name=row.first_name,
            last_name=row.last_name or "",
            email=row.email,
            phone=row.phone,
            registration_date=row.registration_date,
            member_status=MemberStatus.from_string(row.member_status),
            state=EntityState(
                id=row.id,
                created_at=row.created_at,
                updated_at=row.updated_at,
                version=row.version,
            ),
        )

    def _apply(self, borrower: Borrower, row: BorrowerModel) -> None:
        row.first_name = borrower.first_name
        row.last_name = borrower.last_name
        row.email = borrower.email
        row.phone = borrower.phone
        row.registration_date = borrower.registration_date
        row.member_status = borrower.member_status.value

    def get_by_email(self, email: str) -> Optional[Borrower]:
        row = self.db.query(self.model).filter(
            self.model.email == email.strip().lower()
        ).first()
        return self._to_domain(row) if row is not None else None

    def is_email_unique(self, email: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(self.model.id).filter(self.model.email == email.strip().lower())
        if exclude_id:
            query = query.filter(self.model.id != exclude_id)
        return query.first() is None

    def filtered_search(
        self,
        term: Optional[str],
        status_filter: Optional[MemberStatus],
        page: int,
        page_size: int
    ) -> Tuple[List[Borrower], int]:
        query = self.db.query(self.model)

        if term and term.strip():
            pattern = f"%{term.strip().lower()}%"
            query = query.filter(or_(
                func.lower(self.model.first_name).like(pattern),
                func.lower(self.model.last_name).like(pattern),
                func.lower(self.model.email).like(pattern),
                self.model.phone.like(pattern),
            ))

        if status_filter is not None:
            query = query.filter(self.model.member_status == status_filter.value)

        total = query.count()
        ordered = query.order_by(self.model.last_name, self.model.first_name, self.model.id)
        rows = self._page(ordered, page, page_size)
        return [self._to_domain(row) for row in rows], total
