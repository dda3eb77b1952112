"""
Tests for structured logging: operation records and the per-request context.
"""

import logging

import pytest

from exceptions import BookNotFoundError
from utils.logging_utils import (
    clear_logging_context,
    get_logging_context,
    log_operation,
    set_logging_context,
)


def records_for(caplog, message):
    return [record for record in caplog.records if record.getMessage() == message]


@pytest.fixture(autouse=True)
def clean_context():
    clear_logging_context()
    yield
    clear_logging_context()


class TestLogOperation:

    def test_completion_carries_arguments_and_context(self, caplog):
        @log_operation("lookup")
        def lookup(book_id, borrower_id=None):
            return "ok"

        set_logging_context(request_id="req-1")
        with caplog.at_level(logging.INFO):
            assert lookup("book-7", borrower_id="reader-3") == "ok"

        [record] = records_for(caplog, "Completed lookup")
        assert record.request_id == "req-1"
        assert record.book_id == "book-7"
        assert record.borrower_id == "reader-3"
        assert record.operation == "lookup"

    def test_business_rejection_logs_warning_and_reraises(self, caplog):
        @log_operation("lookup")
        def lookup(book_id):
            raise BookNotFoundError(book_id)

        with caplog.at_level(logging.INFO):
            with pytest.raises(BookNotFoundError):
                lookup("missing")

        [record] = [r for r in caplog.records if r.getMessage().startswith("Rejected lookup")]
        assert record.levelno == logging.WARNING
        assert record.error_type == "BookNotFoundError"

    def test_unexpected_failure_logs_error_with_traceback(self, caplog):
        @log_operation("lookup")
        def lookup():
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO):
            with pytest.raises(RuntimeError):
                lookup()

        [record] = records_for(caplog, "Failed lookup")
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None

    def test_clear_resets_context(self):
        set_logging_context(request_id="req-1", borrower_id="reader-3")
        assert get_logging_context() == {"request_id": "req-1", "borrower_id": "reader-3"}

        clear_logging_context()

        assert get_logging_context() == {}


class TestRequestContext:

    def test_request_id_tags_operation_records(self, client, caplog):
        book = {
            "title": "Kindred",
            "author": "Octavia Butler",
            "isbn": "9780807083697",
            "page_count": 264,
            "category": "Fiction",
        }

        with caplog.at_level(logging.INFO):
            response = client.post("/api/books", json=book, headers={"X-Request-ID": "req-42"})

        assert response.status_code == 201
        assert response.headers["X-Request-ID"] == "req-42"
        [record] = records_for(caplog, "Completed create_book")
        assert record.request_id == "req-42"

    def test_request_id_is_generated_when_missing(self, client):
        response = client.get("/api/health")

        assert len(response.headers["X-Request-ID"]) == 32

    def test_each_request_gets_its_own_id(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.post("/api/borrowers", json={"name": "Lauren Olamina", "email": "lauren@acorn.org"})
            client.post("/api/borrowers", json={"name": "Dana Franklin", "email": "dana@example.com"})

        ids = [record.request_id for record in records_for(caplog, "Completed register_borrower")]
        assert len(ids) == 2
        assert ids[0] != ids[1]
