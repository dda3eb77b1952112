"""
Borrower Aggregate

Identity, contact data and the membership state machine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from utils import clock
from domain import validators
from domain.entities import EntityState
from domain.events import BorrowerRegistered, BorrowerUpdated
from domain.value_objects import MemberStatus


@dataclass
class Borrower:
    """
    Aggregate root for a library member.

    Names are sanitized before they are stored, emails are lower-cased and
    phones are reduced to digits. Email uniqueness is checked by the caller
    against the borrower store, not here.
    """

    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    registration_date: datetime = field(default_factory=lambda: clock.utcnow())
    member_status: MemberStatus = MemberStatus.ACTIVE
    state: EntityState = field(default_factory=EntityState)

    @property
    def id(self) -> str:
        return self.state.id

    @classmethod
    def create(cls, first_name: str, last_name: Optional[str], email: str,
               phone: Optional[str] = None) -> "Borrower":
        first = validators.validate_first_name(first_name)
        last = validators.validate_last_name(last_name)
        normalized_email = validators.validate_email(email)
        normalized_phone = validators.normalize_phone(phone)

        borrower = cls(
            first_name=first,
            last_name=last,
            email=normalized_email,
            phone=normalized_phone,
        )
        borrower.registration_date = borrower.state.created_at
        borrower.state.record(BorrowerRegistered(borrower_id=borrower.id))
        return borrower

    @classmethod
    def create_from_full_name(cls, full_name: str, email: str,
                              phone: Optional[str] = None) -> "Borrower":
        first, last = validators.split_full_name(full_name)
        return cls.create(first, last, email, phone)

    def update_contact_info(self, first_name: str, last_name: Optional[str],
                            phone: Optional[str] = None) -> None:
        """
        Replace name and phone.

        Passing ``phone=None`` clears the phone number. Timestamp and event
        are only produced when something actually changed.
        """
        first = validators.validate_first_name(first_name)
        last = validators.validate_last_name(last_name)
        normalized_phone = validators.normalize_phone(phone)

        changed = False
        if self.first_name != first:
            self.first_name = first
            changed = True
        if self.last_name != last:
            self.last_name = last
            changed = True
        if self.phone != normalized_phone:
            self.phone = normalized_phone
            changed = True

        if changed:
            self.state.touch()
            self.state.record(BorrowerUpdated(borrower_id=self.id))

    def update_contact_info_from_full_name(self, full_name: str, phone: Optional[str] = None) -> None:
        first, last = validators.split_full_name(full_name)
        self.update_contact_info(first, last, phone)

    def update_email(self, email: str) -> None:
        normalized = validators.validate_email(email)
        if self.email == normalized:
            return
        self.email = normalized
        self.state.touch()
        self.state.record(BorrowerUpdated(borrower_id=self.id))

    def _set_status(self, status: MemberStatus) -> None:
        if self.member_status is status:
            return
        self.member_status = status
        self.state.touch()

    def activate(self) -> None:
        self._set_status(MemberStatus.ACTIVE)

    def deactivate(self) -> None:
        self._set_status(MemberStatus.INACTIVE)

    def suspend(self) -> None:
        self._set_status(MemberStatus.SUSPENDED)

    def get_full_name(self) -> str:
        if not self.last_name or not self.last_name.strip():
            return self.first_name
        return f"{self.first_name} {self.last_name}"

    def can_borrow_books(self) -> bool:
        return self.member_status.can_borrow()

    def drain_events(self) -> list:
        return self.state.drain_events()

    def clear_events(self) -> None:
        self.state.clear_events()
