"""
Database engine lifecycle and session management.
"""
import logging
import os
from typing import Iterator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from bricksy.core.config import settings
from bricksy.db.base import Base

logger = logging.getLogger(__name__)

engine: Optional[Engine] = None

SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _enable_wal(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite files get their directory and WAL journal mode."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(
            database_url,
            echo=settings.DB_ECHO,
            pool_pre_ping=True,
            pool_recycle=3600
        )

    engine_options = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise each thread sees its own empty database
        engine_options["poolclass"] = StaticPool
    else:
        directory = os.path.dirname(os.path.abspath(url.database))
        os.makedirs(directory, exist_ok=True)

    sqlite_engine = create_engine(database_url, echo=settings.DB_ECHO, **engine_options)
    event.listen(sqlite_engine, "connect", _enable_wal)
    return sqlite_engine


def init_db(database_url: Optional[str] = None) -> Engine:
    """Open the store and create tables. Called once at startup."""
    global engine
    database_url = database_url or settings.database_url
    engine = create_db_engine(database_url)
    SessionLocal.configure(bind=engine)

    # Import models so SQLAlchemy registers them before create_all
    from bricksy.models import User  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")
    return engine


def close_db() -> None:
    """Dispose of the engine. Called once at shutdown."""
    global engine
    if engine is not None:
        engine.dispose()
        logger.info("Database connections closed")
    engine = None


def get_db() -> Iterator[Session]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
