"""
End-to-end tests through the FastAPI app.
"""

from datetime import datetime, timedelta, timezone

BOOK = {
    "title": "The Left Hand of Darkness",
    "author": "Ursula K. Le Guin",
    "isbn": "978-0-441-47812-5",
    "page_count": 304,
    "category": "Science Fiction",
}


def create_book(client, **overrides):
    response = client.post("/api/books", json={**BOOK, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def register(client, name="Genly Ai", email="genly@ekumen.org", phone=None):
    response = client.post("/api/borrowers", json={"name": name, "email": email, "phone": phone})
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


class TestBooksApi:

    def test_create_and_get(self, client):
        book = create_book(client)

        response = client.get(f"/api/books/{book['id']}")

        assert response.status_code == 200
        assert response.json()["isbn"] == "9780441478125"
        assert response.json()["availability"] == "Available"

    def test_validation_error_is_400(self, client):
        response = client.post("/api/books", json={**BOOK, "page_count": 0})

        assert response.status_code == 400
        assert response.json()["detail"] == "Page count must be a positive number"

    def test_malformed_payload_is_422(self, client):
        response = client.post("/api/books", json={"title": "Only a title"})
        assert response.status_code == 422

    def test_duplicate_isbn_is_409(self, client):
        create_book(client)
        response = client.post("/api/books", json={**BOOK, "isbn": "9780441478125"})

        assert response.status_code == 409

    def test_missing_book_is_404(self, client):
        response = client.get("/api/books/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Book with ID does-not-exist not found"

    def test_list_and_search(self, client):
        create_book(client)
        create_book(client, title="Emma", author="Jane Austen", isbn="0141439580", category="Romance")

        listing = client.get("/api/books", params={"search": "austen"}).json()

        assert listing["total_count"] == 1
        assert listing["books"][0]["title"] == "Emma"
        assert client.get("/api/books/isbn/0-14-143958-0").json()["title"] == "Emma"

    def test_update_and_delete(self, client):
        book = create_book(client)

        response = client.put(f"/api/books/{book['id']}", json={
            "title": "Left Hand", "author": BOOK["author"], "page_count": 300,
            "category": "Fiction", "is_available": False,
        })
        assert response.status_code == 200
        assert response.json()["availability"] == "Maintenance"
        assert client.get("/api/books/available").json() == []

        assert client.delete(f"/api/books/{book['id']}").status_code == 204
        assert client.get(f"/api/books/{book['id']}").status_code == 404


class TestBorrowersApi:

    def test_register_and_update(self, client):
        borrower = register(client, phone="555-010-0000")

        response = client.patch(f"/api/borrowers/{borrower['id']}", json={"name": "Genly Ai Envoy"})

        assert response.status_code == 200
        assert response.json()["last_name"] == "Ai Envoy"
        assert response.json()["phone"] == "5550100000"

    def test_duplicate_email_is_409(self, client):
        register(client)
        response = client.post("/api/borrowers", json={"name": "Estraven", "email": "GENLY@ekumen.org"})

        assert response.status_code == 409

    def test_set_status_and_filter(self, client):
        borrower = register(client)

        response = client.put(f"/api/borrowers/{borrower['id']}/status", json={"status": " inactive "})
        assert response.json()["member_status"] == "Inactive"

        assert client.get("/api/borrowers", params={"status": "Inactive"}).json()["total_count"] == 1
        assert client.get("/api/borrowers", params={"status": "nonsense"}).json()["borrowers"] == []


class TestLoansApi:

    def test_borrow_and_return(self, client):
        book = create_book(client)
        borrower = register(client)

        borrowed = client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]})
        assert borrowed.status_code == 201
        loan = borrowed.json()
        assert loan["status"] == "Active"
        assert loan["overdue_fee"] == "0.00"

        active = client.get("/api/loans/active", params={"borrower_id": borrower["id"]}).json()
        assert [item["id"] for item in active["loans"]] == [loan["id"]]

        again = client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]})
        assert again.status_code == 409

        returned = client.post("/api/loans/return", json={"book_id": book["id"], "borrower_id": borrower["id"]})
        assert returned.status_code == 200
        assert returned.json()["status"] == "Returned"

        history = client.get(f"/api/borrowers/{borrower['id']}/loans").json()
        assert [item["id"] for item in history] == [loan["id"]]
        assert client.get(f"/api/loans/{loan['id']}").json()["return_date"] is not None

    def test_inactive_borrower_is_412(self, client):
        book = create_book(client)
        borrower = register(client)
        client.put(f"/api/borrowers/{borrower['id']}/status", json={"status": "Suspended"})

        response = client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]})

        assert response.status_code == 412
        assert response.json()["detail"] == f"Borrower with ID {borrower['id']} is not active"

    def test_return_by_someone_else_is_404(self, client):
        book = create_book(client)
        holder = register(client)
        other = register(client, name="Estraven", email="estraven@karhide.gov")
        client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": holder["id"]})

        response = client.post("/api/loans/return", json={"book_id": book["id"], "borrower_id": other["id"]})

        assert response.status_code == 404

    def test_invalid_paging_is_400(self, client):
        response = client.get("/api/loans/active", params={"borrower_id": "x", "page": 0})
        assert response.status_code == 400

    def test_sweep_ignores_future_cutoff(self, client):
        book = create_book(client)
        borrower = register(client)
        loan = client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]}).json()

        cutoff = (datetime.now(timezone.utc) + timedelta(days=365)).isoformat()
        result = client.post("/api/loans/overdue/sweep", params={"now": cutoff}).json()

        assert result == {"flagged_count": 0, "loan_ids": []}
        assert client.get(f"/api/loans/{loan['id']}").json()["status"] == "Active"

    def test_sweep_flags_past_due_loans(self, client, frozen_now):
        book = create_book(client)
        borrower = register(client)
        loan = client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]}).json()

        frozen_now.advance(days=15)
        result = client.post("/api/loans/overdue/sweep").json()

        assert result == {"flagged_count": 1, "loan_ids": [loan["id"]]}


class TestAnalyticsApi:

    def test_reports_respond(self, client):
        book = create_book(client)
        borrower = register(client)
        client.post("/api/loans/borrow", json={"book_id": book["id"], "borrower_id": borrower["id"]})
        client.post("/api/loans/return", json={"book_id": book["id"], "borrower_id": borrower["id"]})

        now = datetime.now(timezone.utc)
        window = {"start_date": (now - timedelta(days=1)).isoformat(), "end_date": now.isoformat()}

        books = client.get("/api/analytics/books/most-borrowed", params=window).json()
        assert books["books"][0]["borrow_count"] == 1

        readers = client.get("/api/analytics/borrowers/most-active", params=window).json()
        assert readers["borrowers"][0]["borrower_id"] == borrower["id"]

        pace = client.get(f"/api/analytics/borrowers/{borrower['id']}/reading-pace").json()
        assert pace["has_sufficient_data"] is True
        assert pace["average_pages_per_day"] == 304.0

        recs = client.get(f"/api/analytics/books/{book['id']}/recommendations").json()
        assert recs["recommendations"] == []

    def test_future_window_is_400(self, client):
        now = datetime.now(timezone.utc)
        window = {"start_date": now.isoformat(), "end_date": (now + timedelta(days=2)).isoformat()}

        response = client.get("/api/analytics/books/most-borrowed", params=window)

        assert response.status_code == 400
        assert response.json()["detail"] == "End date cannot be in the future"

    def test_recommendation_limit_is_400(self, client):
        book = create_book(client)
        response = client.get(f"/api/analytics/books/{book['id']}/recommendations", params={"limit": 100})
        assert response.status_code == 400
