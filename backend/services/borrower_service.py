"""
Borrower Service

Registers borrowers, edits their profiles and membership status, and lists
them.
"""

import logging
from typing import Callable, Optional

from exceptions import BorrowerNotFoundError, DuplicateEmailError, ValidationError
from domain.aggregates import Borrower
from domain.validators import validate_email
from domain.value_objects import MemberStatus
from dtos.response import BorrowerListResponse, BorrowerResponse
from services.interfaces import UnitOfWork
from services.pagination import normalize_paging, total_pages
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class BorrowerService:
    """Service for borrower commands and queries."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    @log_operation("register_borrower")
    def register_borrower(self, name: str, email: str, phone: Optional[str] = None) -> BorrowerResponse:
        """
        Register a new borrower from a full name.

        Raises:
            BorrowerValidationError: If name, email or phone is invalid
            DuplicateEmailError: If the email is already registered
        """
        borrower = Borrower.create_from_full_name(name, email, phone)
        with self._uow_factory() as uow:
            if not uow.borrowers.is_email_unique(borrower.email):
                raise DuplicateEmailError()

            uow.borrowers.add(borrower)
            uow.track(borrower)
            uow.commit()

        logger.info(f"Registered borrower {borrower.id}")
        return BorrowerResponse.from_domain(borrower)

    @log_operation("update_borrower")
    def update_borrower(
        self,
        borrower_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> BorrowerResponse:
        """
        Apply a partial profile update; ``None`` fields are left unchanged.

        A new email is format-checked before its uniqueness is checked.
        A name update keeps the current phone unless a phone is also given.

        Raises:
            BorrowerNotFoundError: If the borrower does not exist
            BorrowerValidationError: If a supplied field is invalid
            DuplicateEmailError: If the new email belongs to another borrower
        """
        with self._uow_factory() as uow:
            borrower = uow.borrowers.get_by_id(borrower_id)
            if borrower is None:
                raise BorrowerNotFoundError(borrower_id)

            if email is not None:
                normalized = validate_email(email)
                if normalized != borrower.email:
                    if not uow.borrowers.is_email_unique(normalized, exclude_id=borrower_id):
                        raise DuplicateEmailError("Email is already in use by another borrower")
                    borrower.update_email(normalized)

            if name is not None:
                borrower.update_contact_info_from_full_name(
                    name.strip(), phone.strip() if phone is not None else borrower.phone
                )
            elif phone is not None:
                borrower.update_contact_info(borrower.first_name, borrower.last_name, phone.strip())

            if is_active is True:
                borrower.activate()
            elif is_active is False:
                borrower.deactivate()

            uow.borrowers.update(borrower)
            uow.track(borrower)
            uow.commit()

        return BorrowerResponse.from_domain(borrower)

    @log_operation("set_member_status")
    def set_member_status(self, borrower_id: str, status: str) -> BorrowerResponse:
        """
        Move a borrower to Active, Inactive or Suspended.

        Raises:
            ValidationError: If status is not a known membership status
            BorrowerNotFoundError: If the borrower does not exist
        """
        member_status = MemberStatus.parse(status)
        if member_status is None:
            raise ValidationError(f"Invalid member status: {status}", field="status")

        with self._uow_factory() as uow:
            borrower = uow.borrowers.get_by_id(borrower_id)
            if borrower is None:
                raise BorrowerNotFoundError(borrower_id)

            if member_status is MemberStatus.ACTIVE:
                borrower.activate()
            elif member_status is MemberStatus.INACTIVE:
                borrower.deactivate()
            else:
                borrower.suspend()

            uow.borrowers.update(borrower)
            uow.track(borrower)
            uow.commit()

        return BorrowerResponse.from_domain(borrower)

    def get_borrower(self, borrower_id: str) -> BorrowerResponse:
        """
        Raises:
            BorrowerNotFoundError: If the borrower does not exist
        """
        with self._uow_factory() as uow:
            borrower = uow.borrowers.get_by_id(borrower_id)
        if borrower is None:
            raise BorrowerNotFoundError(borrower_id)
        return BorrowerResponse.from_domain(borrower)

    def list_borrowers(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        status: Optional[str] = None
    ) -> BorrowerListResponse:
        """
        Page through borrowers ordered by last name, then first name.

        An unrecognised status filter yields an empty page instead of an error.
        """
        page, page_size = normalize_paging(page, page_size)

        status_filter = None
        if status and status.strip():
            status_filter = MemberStatus.parse(status)
            if status_filter is None:
                logger.warning(f"Invalid member status filter: {status}")
                return BorrowerListResponse(
                    borrowers=[], total_count=0, page=page, page_size=page_size, total_pages=0
                )

        with self._uow_factory() as uow:
            borrowers, total = uow.borrowers.filtered_search(search, status_filter, page, page_size)

        return BorrowerListResponse(
            borrowers=[BorrowerResponse.from_domain(borrower) for borrower in borrowers],
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
        )
