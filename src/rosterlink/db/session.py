"""
Engine and session handling for the RosterLink player store.

The engine is created on first use from settings.database_url, so scripts
that only parse arguments or print help never open a connection.

Usage:
    from rosterlink.db import get_session

    with get_session() as session:
        stats = build_crosswalk(session, "NFL", 2024)
        # Commits automatically on exit, rolls back on exception
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from rosterlink.config import settings


def get_engine() -> Engine:
    """
    Build a pooled engine for the player store.

    SQL is echoed when LOG_LEVEL=DEBUG. Pre-ping drops connections the
    server closed between crosswalk runs.
    """
    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.log_level == "DEBUG",
    )


_engine = None


def _get_engine() -> Engine:
    """Get or create the singleton engine instance."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return _engine


# Engine is bound on first use, so importing this module never connects
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits on successful exit and rolls back on exception, so a crosswalk
    rebuild inside one block is atomic for readers.

    Raises:
        Any exception from the database operation (after rollback)
    """
    session = SessionLocal(bind=_get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
