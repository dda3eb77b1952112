from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def _install_sqlite_listeners(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        # Let SQLAlchemy emit BEGIN itself so "begin" below controls the lock mode
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for the write lock
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def begin_immediate(conn):
        # Take the write lock up front: borrow/return read-then-write sequences serialize
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine.

    SQLite files get WAL mode, a busy timeout, enforced foreign keys and
    immediate write transactions. In-memory SQLite shares one connection.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True, pool_recycle=3600)

    if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
        engine = create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            echo=echo,
        )
    else:
        db_file = database_url.split("///", 1)[-1]
        Path(db_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            database_url,
            connect_args={'check_same_thread': False, 'timeout': 5},
            echo=echo,
            pool_size=20,
            max_overflow=30,
            pool_pre_ping=True,
            pool_recycle=3600
        )

    _install_sqlite_listeners(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    # Aggregates are mapped out of rows before commit, so rows need not expire
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Create all tables and indexes that do not exist yet."""
    import models  # noqa: F401  registers the mapped tables on Base

    Base.metadata.create_all(engine)
    logger.info(f"Database schema ready ({engine.url.get_backend_name()})")

