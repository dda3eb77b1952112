import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import itertools
from datetime import datetime, timedelta

import pytest

from config.settings import Settings
from database import create_db_engine, create_session_factory, init_database
from services.analytics_service import AnalyticsService
from services.borrower_service import BorrowerService
from services.catalog_service import CatalogService
from services.event_dispatcher import RecordingEventSink
from services.lending_service import LendingService
from services.unit_of_work import make_uow_factory
from utils import clock


class FrozenClock:
    """Controllable replacement for utils.clock.utcnow."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def frozen_now(monkeypatch):
    """Freeze the application clock at a fixed naive UTC instant."""
    frozen = FrozenClock(datetime(2024, 3, 1, 10, 0, 0))
    monkeypatch.setattr(clock, "utcnow", frozen)
    return frozen


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'library.db'}"


@pytest.fixture
def engine(database_url):
    """File-backed SQLite database with the full schema, one per test."""
    engine = create_db_engine(database_url)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def event_sink():
    return RecordingEventSink()


@pytest.fixture
def uow_factory(session_factory, event_sink):
    return make_uow_factory(session_factory, event_sink)


@pytest.fixture
def catalog(uow_factory):
    return CatalogService(uow_factory)


@pytest.fixture
def borrowers(uow_factory):
    return BorrowerService(uow_factory)


@pytest.fixture
def lending(uow_factory):
    return LendingService(uow_factory)


@pytest.fixture
def analytics(uow_factory):
    return AnalyticsService(uow_factory)


@pytest.fixture
def make_book(catalog):
    """Create books with unique ISBN-13s."""
    counter = itertools.count(1)

    def _make(title=None, author="Jane Author", page_count=300, category="Fiction"):
        n = next(counter)
        return catalog.create_book(
            title=title or f"Book {n}",
            author=author,
            isbn=f"978{n:010d}",
            page_count=page_count,
            category=category,
        )
    return _make


@pytest.fixture
def make_borrower(borrowers):
    """Register borrowers with unique emails."""
    counter = itertools.count(1)

    def _make(name=None, phone=None):
        n = next(counter)
        return borrowers.register_borrower(
            name=name or f"Reader Number{n}",
            email=f"reader{n}@example.com",
            phone=phone,
        )
    return _make


@pytest.fixture
def settings(database_url, tmp_path):
    return Settings(database_url=database_url, log_dir=tmp_path / "logs")


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient
    from main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client
