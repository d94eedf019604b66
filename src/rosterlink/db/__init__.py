"""
Database module for RosterLink.

Provides SQLAlchemy ORM models and session management.

Usage:
    from rosterlink.db import get_session, ProviderPlayer

    with get_session() as session:
        players = session.query(ProviderPlayer).all()
"""

from rosterlink.db.models import (
    Base,
    PlayerCrosswalk,
    PlayerNameAlias,
    ProviderPlayer,
)
from rosterlink.db.session import get_engine, get_session, SessionLocal

__all__ = [
    # Base
    "Base",
    # Models
    "ProviderPlayer",
    "PlayerNameAlias",
    "PlayerCrosswalk",
    # Session
    "get_session",
    "get_engine",
    "SessionLocal",
]
