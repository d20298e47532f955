"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.

The engine and session factory are created once per process. Services get a
Session handed in by the caller (FastAPI dependency or get_db_context) and
wrap every multi-statement write in transaction().
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from shared.config.settings import DATABASE_URL
from shared.config.logging import get_logger

logger = get_logger(__name__)


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20.
    """
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def _engine_options(url: str) -> dict[str, Any]:
    """Engine keyword arguments for the given database URL."""
    if url.startswith("sqlite"):
        # Single shared connection: in-memory databases live as long as the engine
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": _calculate_pool_size(),
        "max_overflow": 15,
        "pool_timeout": 30,  # Wait max 30s for connection from pool
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
        "connect_args": {"connect_timeout": 10},
    }


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine for url with the pool settings matching its dialect."""
    return create_engine(url, echo=False, **_engine_options(url))


engine = create_db_engine()

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/books/{book_id}")
        def get_book(book_id: int, db: Session = Depends(get_db)):
            return BookReadService(db).find_by_id(book_id)

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            BookReadService(db).count()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    Transaction scope for a write.

    Commits when the block completes and rolls back when it raises, so a
    multi-statement write is never left half-applied. The original
    exception is re-raised after the rollback.

    Usage:
        with transaction(db):
            db.add(book)
            db.flush()
            db.add(book_file)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        logger.debug("Transaction rolled back")
        raise
