"""
Tests for BorrowerService.
"""

import pytest

from exceptions import (
    BorrowerNotFoundError,
    BorrowerValidationError,
    ConflictError,
    DuplicateEmailError,
    ValidationError,
)


class TestRegister:

    def test_register_borrower(self, borrowers, event_sink):
        borrower = borrowers.register_borrower("Ada Lovelace", "Ada@Example.com", "+44 20 7946 0018")

        assert borrower.first_name == "Ada"
        assert borrower.last_name == "Lovelace"
        assert borrower.full_name == "Ada Lovelace"
        assert borrower.email == "ada@example.com"
        assert borrower.phone == "442079460018"
        assert borrower.member_status == "Active"
        assert len(event_sink.of_type("borrower_registered")) == 1

    def test_duplicate_email_is_case_insensitive(self, borrowers):
        borrowers.register_borrower("Ada Lovelace", "ada@example.com")

        with pytest.raises(DuplicateEmailError):
            borrowers.register_borrower("Ada King", "ADA@example.com")

    def test_invalid_email(self, borrowers):
        with pytest.raises(BorrowerValidationError, match="Invalid email format"):
            borrowers.register_borrower("Ada Lovelace", "ada.example.com")


class TestUpdate:

    def test_unknown_borrower(self, borrowers):
        with pytest.raises(BorrowerNotFoundError):
            borrowers.update_borrower("missing", name="Someone")

    def test_change_email(self, borrowers, make_borrower):
        borrower = make_borrower()

        updated = borrowers.update_borrower(borrower.id, email="New.Address@Example.com")

        assert updated.email == "new.address@example.com"

    def test_email_taken_by_another_borrower(self, borrowers, make_borrower):
        first, second = make_borrower(), make_borrower()

        with pytest.raises(ConflictError, match="already in use by another borrower"):
            borrowers.update_borrower(second.id, email=first.email.upper())

    def test_keeping_own_email_is_allowed(self, borrowers, make_borrower):
        borrower = make_borrower()
        assert borrowers.update_borrower(borrower.id, email=borrower.email).email == borrower.email

    def test_invalid_email_is_checked_before_uniqueness(self, borrowers, make_borrower):
        borrower = make_borrower()
        with pytest.raises(BorrowerValidationError):
            borrowers.update_borrower(borrower.id, email="broken")

    def test_name_update_keeps_phone(self, borrowers, make_borrower):
        borrower = make_borrower(phone="555-010-0000")

        updated = borrowers.update_borrower(borrower.id, name="Grace Hopper")

        assert updated.full_name == "Grace Hopper"
        assert updated.phone == "5550100000"

    def test_name_and_phone_update(self, borrowers, make_borrower):
        borrower = make_borrower(phone="555-010-0000")

        updated = borrowers.update_borrower(borrower.id, name="Grace Hopper", phone="555 020 0000")

        assert updated.phone == "5550200000"

    def test_phone_only_update(self, borrowers, make_borrower):
        borrower = make_borrower()

        updated = borrowers.update_borrower(borrower.id, phone="(555) 030-0000")

        assert updated.phone == "5550300000"
        assert updated.first_name == borrower.first_name

    def test_deactivate_and_reactivate(self, borrowers, make_borrower):
        borrower = make_borrower()

        assert borrowers.update_borrower(borrower.id, is_active=False).member_status == "Inactive"
        assert borrowers.update_borrower(borrower.id, is_active=True).member_status == "Active"


class TestMemberStatus:

    def test_set_status_case_insensitive(self, borrowers, make_borrower):
        borrower = make_borrower()
        assert borrowers.set_member_status(borrower.id, "suspended").member_status == "Suspended"

    def test_unknown_status(self, borrowers, make_borrower):
        with pytest.raises(ValidationError, match="Invalid member status"):
            borrowers.set_member_status(make_borrower().id, "Banned")


class TestListBorrowers:

    def test_ordered_by_last_then_first_name(self, borrowers):
        borrowers.register_borrower("Zoe Adams", "zoe@example.com")
        borrowers.register_borrower("Amy Adams", "amy@example.com")
        borrowers.register_borrower("Bob Brown", "bob@example.com")

        page = borrowers.list_borrowers()

        assert [b.full_name for b in page.borrowers] == ["Amy Adams", "Zoe Adams", "Bob Brown"]
        assert page.total_pages == 1

    def test_search_and_status_filter(self, borrowers):
        amy = borrowers.register_borrower("Amy Adams", "amy@example.com", "5550001111")
        bob = borrowers.register_borrower("Bob Brown", "bob@library.org")
        borrowers.set_member_status(bob.id, "Inactive")

        assert [b.id for b in borrowers.list_borrowers(search="LIBRARY").borrowers] == [bob.id]
        assert [b.id for b in borrowers.list_borrowers(search="0001111").borrowers] == [amy.id]
        assert [b.id for b in borrowers.list_borrowers(status="active").borrowers] == [amy.id]

    def test_unknown_status_filter_gives_empty_page(self, borrowers, make_borrower):
        make_borrower()

        page = borrowers.list_borrowers(status="Banned")

        assert page.borrowers == []
        assert page.total_count == 0
