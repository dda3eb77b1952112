from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import Optional
import logging
import sys
import uuid

from api import analytics, books, borrowers, loans
from config.settings import Settings, load_settings
from database import create_db_engine, create_session_factory, init_database
from domain.events import ALL_EVENT_TYPES
from services.analytics_service import AnalyticsService
from services.borrower_service import BorrowerService
from services.catalog_service import CatalogService
from services.event_dispatcher import EventDispatcher, log_event
from services.lending_service import LendingService
from services.unit_of_work import make_uow_factory
from utils.logging_utils import clear_logging_context, set_logging_context

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
REQUEST_ID_HEADER = "X-Request-ID"


def configure_logging(settings: Settings) -> None:
    """
    Install a rotating file handler and a stdout handler on the root logger.

    Safe to call more than once; handlers from a previous call are replaced.
    """
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / "backend.log"
    level = logging.getLevelName(settings.log_level)
    log_formatter = logging.Formatter(LOG_FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging initialized: {log_file}")


def build_event_dispatcher() -> EventDispatcher:
    """Dispatcher with the audit log handler registered for every event type."""
    dispatcher = EventDispatcher()
    for event_type in ALL_EVENT_TYPES:
        dispatcher.register(event_type, log_event)
    return dispatcher


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application: engine, schema, unit of work factory and services.

    Args:
        settings: Runtime settings (defaults to ``load_settings()``)
    """
    settings = settings or load_settings()

    engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
    init_database(engine)
    session_factory = create_session_factory(engine)
    uow_factory = make_uow_factory(session_factory, build_event_dispatcher())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan - startup and shutdown"""
        logger.info(f"Library lending API ready ({engine.url.get_backend_name()})")
        yield
        logger.info("Shutting down, disposing database engine")
        engine.dispose()

    app = FastAPI(
        title="Library Lending API",
        description="Catalog, membership, lending and reading analytics for a library",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        """Tag every log record written while serving the request with its id."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_logging_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_logging_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.state.settings = settings
    app.state.engine = engine
    app.state.catalog_service = CatalogService(uow_factory)
    app.state.borrower_service = BorrowerService(uow_factory)
    app.state.lending_service = LendingService(
        uow_factory,
        default_loan_days=settings.default_loan_days,
        daily_overdue_fee=settings.daily_overdue_fee,
    )
    app.state.analytics_service = AnalyticsService(uow_factory)

    app.include_router(books.router, prefix="/api/books", tags=["books"])
    app.include_router(borrowers.router, prefix="/api/borrowers", tags=["borrowers"])
    app.include_router(loans.router, prefix="/api/loans", tags=["loans"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])

    @app.get("/api/health", tags=["system"])
    def health():
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn
    from constants import ServerConfig

    settings = load_settings()
    configure_logging(settings)
    logger.info(f"Starting Library Lending API on {ServerConfig.url()}...")
    uvicorn.run(create_app(settings), host=ServerConfig.HOST, port=ServerConfig.PORT, log_config=None)


if __name__ == "__main__":
    main()
