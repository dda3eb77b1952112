"""
Tests for the Book, Borrower and Loan aggregates.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from exceptions import BookOperationError, BookValidationError, LoanOperationError, LoanValidationError
from domain.aggregates import Book, Borrower, Loan
from domain.events import BookBorrowed, BookCreated, BookReturned, BorrowerRegistered, BorrowerUpdated
from domain.value_objects import BookAvailability, BookCategory, LoanStatus, MemberStatus


def new_book(**overrides):
    fields = dict(title="Dune", author="Frank Herbert", isbn="978-0-441-17271-9",
                  page_count=412, category="Science Fiction")
    fields.update(overrides)
    return Book.create(**fields)


class TestBook:

    def test_create_starts_available_with_clean_isbn(self, frozen_now):
        book = new_book()

        assert book.availability is BookAvailability.AVAILABLE
        assert book.category is BookCategory.SCIENCE_FICTION
        assert book.isbn == "9780441172719"
        assert book.state.created_at == frozen_now.now
        assert book.state.updated_at is None
        assert [type(e) for e in book.drain_events()] == [BookCreated]

    def test_create_rejects_bad_isbn(self):
        with pytest.raises(BookValidationError):
            new_book(isbn="12-34")

    def test_borrow_twice_fails_without_touching(self, frozen_now):
        book = new_book()
        book.mark_as_borrowed()
        stamped = book.state.updated_at

        frozen_now.advance(hours=1)
        with pytest.raises(BookOperationError):
            book.mark_as_borrowed()

        assert book.availability is BookAvailability.BORROWED
        assert book.state.updated_at == stamped

    def test_reserve_requires_available(self):
        book = new_book()
        book.mark_under_maintenance()

        with pytest.raises(BookOperationError):
            book.mark_as_reserved()

    def test_maintenance_reachable_from_any_state(self):
        book = new_book()
        book.mark_as_borrowed()
        book.mark_under_maintenance()
        assert book.availability is BookAvailability.MAINTENANCE

        book.mark_as_available()
        assert book.is_available()

    def test_noop_availability_change_does_not_bump_timestamp(self):
        book = new_book()
        book.mark_as_available()
        assert book.state.updated_at is None

    def test_update_details_revalidates_and_keeps_isbn(self, frozen_now):
        book = new_book()
        book.drain_events()
        frozen_now.advance(days=1)

        book.update_details("Dune Messiah", "Frank Herbert", 256, "Fantasy")

        assert book.title == "Dune Messiah"
        assert book.category is BookCategory.FANTASY
        assert book.isbn == "9780441172719"
        assert book.state.updated_at == frozen_now.now
        assert len(book.drain_events()) == 1

        with pytest.raises(BookValidationError):
            book.update_details("", "Frank Herbert", 256, "Fantasy")


class TestBorrower:

    def test_create_from_full_name(self, frozen_now):
        borrower = Borrower.create_from_full_name("Mary Ann Evans", "George@Eliot.org", "(020) 7946-0018")

        assert borrower.first_name == "Mary"
        assert borrower.last_name == "Ann Evans"
        assert borrower.email == "george@eliot.org"
        assert borrower.phone == "02079460018"
        assert borrower.member_status is MemberStatus.ACTIVE
        assert borrower.registration_date == frozen_now.now
        assert borrower.get_full_name() == "Mary Ann Evans"
        assert [type(e) for e in borrower.drain_events()] == [BorrowerRegistered]

    def test_single_name_full_name(self):
        borrower = Borrower.create_from_full_name("Plato", "plato@academy.gr")
        assert borrower.last_name == ""
        assert borrower.get_full_name() == "Plato"

    def test_name_is_sanitized(self):
        borrower = Borrower.create_from_full_name("<script>Eve</script> Smith", "eve@example.com")
        assert borrower.first_name == "scriptEvescript"
        assert borrower.last_name == "Smith"

    def test_contact_update_without_change_is_silent(self):
        borrower = Borrower.create_from_full_name("Ada Lovelace", "ada@example.com")
        borrower.drain_events()

        borrower.update_contact_info("Ada", "Lovelace", None)

        assert borrower.state.updated_at is None
        assert borrower.drain_events() == []

    def test_contact_update_records_event(self):
        borrower = Borrower.create_from_full_name("Ada Lovelace", "ada@example.com")
        borrower.drain_events()

        borrower.update_contact_info_from_full_name("Ada King", "5550100000")

        assert borrower.last_name == "King"
        assert borrower.phone == "5550100000"
        assert [type(e) for e in borrower.drain_events()] == [BorrowerUpdated]

    def test_same_email_is_noop(self):
        borrower = Borrower.create_from_full_name("Ada Lovelace", "ada@example.com")
        borrower.update_email("ADA@example.com")
        assert borrower.state.updated_at is None

    def test_status_changes_are_idempotent(self, frozen_now):
        borrower = Borrower.create_from_full_name("Ada Lovelace", "ada@example.com")

        borrower.activate()
        assert borrower.state.updated_at is None

        borrower.suspend()
        assert borrower.member_status is MemberStatus.SUSPENDED
        assert not borrower.can_borrow_books()

        borrower.deactivate()
        borrower.activate()
        assert borrower.can_borrow_books()


class TestLoan:

    def test_create_sets_due_date(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")

        assert loan.status is LoanStatus.ACTIVE
        assert loan.borrow_date == frozen_now.now
        assert loan.due_date == frozen_now.now + timedelta(days=14)
        assert loan.return_date is None
        assert [type(e) for e in loan.drain_events()] == [BookBorrowed]

    def test_create_rejects_long_period(self):
        with pytest.raises(LoanValidationError):
            Loan.create("book-1", "reader-1", 43)

    def test_on_time_return(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")
        loan.drain_events()
        frozen_now.advance(days=10)

        loan.return_book()

        assert loan.status is LoanStatus.RETURNED
        assert loan.return_date == frozen_now.now
        assert loan.is_returned()
        assert loan.calculate_overdue_fee() == Decimal("0.00")
        assert [type(e) for e in loan.drain_events()] == [BookReturned]

    def test_late_return_is_overdue_with_fee(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")
        frozen_now.advance(days=17)

        loan.return_book()

        assert loan.status is LoanStatus.OVERDUE
        assert loan.calculate_overdue_fee() == Decimal("1.50")

    def test_return_twice_fails(self):
        loan = Loan.create("book-1", "reader-1")
        loan.return_book()

        with pytest.raises(LoanOperationError, match="Only active loans can be returned"):
            loan.return_book()

    def test_return_before_borrow_date_fails(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")

        with pytest.raises(LoanOperationError, match="before borrow date"):
            loan.return_book(frozen_now.now - timedelta(minutes=1))

    def test_mark_as_overdue_requires_past_due(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")

        with pytest.raises(LoanOperationError, match="not yet overdue"):
            loan.mark_as_overdue()

        frozen_now.advance(days=15)
        assert loan.is_overdue()
        assert loan.days_overdue() == 1

        loan.mark_as_overdue()
        assert loan.status is LoanStatus.OVERDUE
        assert not loan.is_overdue()
        assert loan.days_overdue() == 1

    def test_swept_loan_can_still_be_returned(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")
        frozen_now.advance(days=16)
        loan.mark_as_overdue()
        assert loan.is_open()
        assert not loan.is_returned()

        frozen_now.advance(days=2)
        loan.return_book()

        assert loan.status is LoanStatus.OVERDUE
        assert loan.is_returned()
        assert loan.calculate_overdue_fee() == Decimal("2.00")

    def test_fee_counts_calendar_days(self, frozen_now):
        loan = Loan.create("book-1", "reader-1")
        # 14 days and 15 hours later crosses one calendar day boundary past due
        loan.return_book(frozen_now.now + timedelta(days=14, hours=15))

        assert loan.status is LoanStatus.OVERDUE
        assert loan.calculate_overdue_fee(Decimal("1.25")) == Decimal("1.25")
