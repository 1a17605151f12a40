"""Database connection and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from traintrack.core.config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for PostgreSQL or SQLite.

    SQLite gets foreign key enforcement switched on so ON DELETE CASCADE
    behaves as on PostgreSQL; an in-memory SQLite URL shares one connection.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=echo)

    kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(url, **kwargs)
    event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
    return sqlite_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return False
