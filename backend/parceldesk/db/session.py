import logging

from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from parceldesk.core.config import get_database_url

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _build_engine(database_url: str):
    url = make_url(database_url)
    if url.drivername.startswith("postgres"):
        return create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={
                "application_name": "parceldesk",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
        )
    if url.drivername.startswith("sqlite"):
        if url.database in (None, "", ":memory:"):
            # Use a single shared in-memory database across the process
            # so DDL persists across connections.
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url)


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine, _database_url, _SessionLocal
    database_url = get_database_url()
    # If engine not created yet or DATABASE_URL changed, (re)create engine
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = _build_engine(database_url)
        _database_url = database_url
        _SessionLocal = None
        logger.debug(
            "SQLAlchemy engine created",
            extra={
                "context": {
                    "url": _engine.url.render_as_string(hide_password=True),
                    "dialect": _engine.dialect.name,
                }
            },
        )
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
    return _SessionLocal


def SessionLocal():
    """Calling SessionLocal() returns a new Session bound to the current engine."""
    return get_sessionmaker()()


def create_tables():
    """Create all tables in database using the lazy engine."""
    # Ensure models are imported so Base.metadata is populated
    from parceldesk.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from parceldesk.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
