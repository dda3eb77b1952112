"""
Tests for CatalogService.
"""

import pytest

from exceptions import BookNotFoundError, BookValidationError, ConflictError, DuplicateIsbnError


class TestCreateBook:

    def test_create_book(self, catalog, event_sink):
        book = catalog.create_book("Middlemarch", "George Eliot", "978-0-14-143954-9", 880, "Fiction")

        assert book.isbn == "9780141439549"
        assert book.availability == "Available"
        assert book.is_available
        assert len(event_sink.of_type("book_created")) == 1

    def test_duplicate_isbn_ignores_hyphenation(self, catalog):
        catalog.create_book("Middlemarch", "George Eliot", "9780141439549", 880, "Fiction")

        with pytest.raises(DuplicateIsbnError, match="A book with this ISBN already exists"):
            catalog.create_book("Middlemarch (copy)", "George Eliot", "978-0141439549", 880, "Fiction")

    def test_invalid_book_is_not_stored(self, catalog):
        with pytest.raises(BookValidationError, match="Invalid category"):
            catalog.create_book("Cookbook", "Chef", "9780141439549", 120, "Cooking")

        assert catalog.list_books().total_count == 0


class TestUpdateBook:

    def test_update_details(self, catalog, make_book):
        book = make_book()

        updated = catalog.update_book(book.id, "New Title", "New Author", 123, "History")

        assert updated.title == "New Title"
        assert updated.category == "History"
        assert updated.isbn == book.isbn
        assert updated.updated_at is not None

    def test_unknown_book(self, catalog):
        with pytest.raises(BookNotFoundError):
            catalog.update_book("missing", "T", "A", 10, "Fiction")

    def test_availability_override(self, catalog, make_book):
        book = make_book()

        hidden = catalog.update_book(book.id, book.title, book.author, book.page_count, book.category, is_available=False)
        assert hidden.availability == "Maintenance"

        restored = catalog.update_book(book.id, book.title, book.author, book.page_count, book.category, is_available=True)
        assert restored.availability == "Available"

    def test_cannot_mark_lent_book_available(self, catalog, lending, make_book, make_borrower):
        book = make_book()
        lending.borrow_book(book.id, make_borrower().id)

        with pytest.raises(ConflictError, match="must be returned first"):
            catalog.update_book(book.id, book.title, book.author, book.page_count, book.category, is_available=True)

        assert catalog.get_book(book.id).availability == "Borrowed"

    def test_lent_book_stays_borrowed_when_hidden(self, catalog, lending, make_book, make_borrower):
        book = make_book()
        lending.borrow_book(book.id, make_borrower().id)

        updated = catalog.update_book(book.id, book.title, book.author, book.page_count, book.category, is_available=False)

        assert updated.availability == "Borrowed"


class TestQueries:

    def test_get_book_by_isbn(self, catalog, make_book):
        book = make_book()
        assert catalog.get_book_by_isbn(book.isbn).id == book.id

    def test_get_missing_book(self, catalog):
        with pytest.raises(BookNotFoundError, match="Book with ID nope not found"):
            catalog.get_book("nope")

    def test_list_books_paging_is_clamped(self, catalog, make_book):
        for title in ("Alpha", "Bravo", "Charlie"):
            make_book(title=title)

        page = catalog.list_books(page=0, page_size=2)

        assert page.page == 1
        assert page.page_size == 2
        assert page.total_count == 3
        assert page.total_pages == 2
        assert page.has_next_page
        assert [b.title for b in page.books] == ["Alpha", "Bravo"]

        assert catalog.list_books(page_size=500).page_size == 100
        assert catalog.list_books(page_size=-1).page_size == 20

    def test_search_and_category_filter(self, catalog, make_book):
        make_book(title="The Hobbit", author="J. R. R. Tolkien", category="Fantasy")
        make_book(title="A Brief History of Time", author="Stephen Hawking", category="Science")
        make_book(title="Hobbies for Everyone", author="Pat Doe", category="Reference")

        assert {b.title for b in catalog.list_books(search="HOBB").books} == {"The Hobbit", "Hobbies for Everyone"}
        assert [b.title for b in catalog.list_books(search="hawking").books] == ["A Brief History of Time"]
        assert [b.title for b in catalog.list_books(category="Fantasy").books] == ["The Hobbit"]
        assert [b.title for b in catalog.list_books(search="science").books] == ["A Brief History of Time"]

    def test_list_available_books(self, catalog, lending, make_book, make_borrower):
        shelf = make_book(title="On the shelf")
        lent = make_book(title="Lent out")
        lending.borrow_book(lent.id, make_borrower().id)

        assert [b.id for b in catalog.list_available_books()] == [shelf.id]

    def test_list_books_by_category(self, catalog, make_book):
        poem = make_book(category="Poetry")
        make_book(category="Drama")

        assert [b.id for b in catalog.list_books_by_category("Poetry")] == [poem.id]


class TestDeleteBook:

    def test_delete_unlent_book(self, catalog, make_book):
        book = make_book()
        catalog.delete_book(book.id)

        with pytest.raises(BookNotFoundError):
            catalog.get_book(book.id)

    def test_delete_missing_book(self, catalog):
        with pytest.raises(BookNotFoundError):
            catalog.delete_book("missing")

    def test_book_with_loan_history_cannot_be_deleted(self, catalog, lending, make_book, make_borrower):
        book = make_book()
        reader = make_borrower()
        lending.borrow_book(book.id, reader.id)
        lending.return_book(book.id, reader.id)

        with pytest.raises(ConflictError, match="loan history"):
            catalog.delete_book(book.id)
