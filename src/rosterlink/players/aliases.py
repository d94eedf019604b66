"""
Alias resolution between the two providers' naming conventions.

Some athletes are published under a nickname by one provider and a legal
name by the other ("Gabe Davis" vs "Gabriel Davis"). Normalization cannot
bridge that gap, so a small pre-seeded table maps provider A spellings to
the form provider B uses. The table is reference data: the matching engine
only reads it, and a missing table simply means no aliases.
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rosterlink.db.models import PlayerNameAlias
from rosterlink.players.normalize import normalize_name

logger = logging.getLogger(__name__)

# Well-known NFL nickname -> legal name pairs, seeded by seed_aliases()
DEFAULT_ALIASES: dict[str, list[tuple[str, str]]] = {
    "NFL": [
        ("Gabe Davis", "Gabriel Davis"),
        ("Hollywood Brown", "Marquise Brown"),
        ("Chig Okonkwo", "Chigoziem Okonkwo"),
        ("Scotty Miller", "Scott Miller"),
        ("Josh Palmer", "Joshua Palmer"),
        ("Tank Dell", "Nathaniel Dell"),
        ("Bub Means", "Jerrod Means"),
    ],
}


class AliasResolver:
    """
    Translate a provider A name into provider B's canonical spelling.

    Usage:
        resolver = AliasResolver({"gabedavis": "gabrieldavis"})
        resolver.resolve("Gabe Davis")      # 'gabrieldavis'
        resolver.resolve("Josh Allen")      # 'joshallen' (no alias)
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        # Re-normalize so callers can pass raw display names
        self._aliases: dict[str, str] = {}
        for alias, canonical in (mapping or {}).items():
            alias_key = normalize_name(alias)
            if alias_key:
                self._aliases[alias_key] = normalize_name(canonical)

    def __len__(self) -> int:
        return len(self._aliases)

    def resolve(self, full_name: str) -> str:
        """
        Return the canonical normalized name for full_name.

        Falls back to the normalized input when there is no alias, so a
        result equal to normalize_name(full_name) means the alias path has
        nothing to offer.
        """
        normalized = normalize_name(full_name)
        return self._aliases.get(normalized, normalized)

    @classmethod
    def from_session(cls, session: Session, sport: str) -> "AliasResolver":
        """Build a resolver from the alias table for one sport."""
        return cls(load_alias_table(session, sport))


def load_alias_table(session: Session, sport: str) -> dict[str, str]:
    """
    Load {normalized alias: normalized canonical} for a sport.

    Aliases are an enhancement, so any database error (most commonly the
    table not existing yet) is logged and treated as an empty table.
    """
    # Checked up front: a failed SELECT would abort a PostgreSQL transaction
    if not inspect(session.connection()).has_table(PlayerNameAlias.__tablename__):
        logger.warning("Alias table missing, continuing without aliases for %s", sport)
        return {}

    try:
        rows = (
            session.query(PlayerNameAlias.alias_name, PlayerNameAlias.canonical_name)
            .filter(PlayerNameAlias.sport == sport)
            .order_by(PlayerNameAlias.id)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.warning("Alias table unavailable for %s, continuing without aliases: %s", sport, exc)
        return {}

    table = {
        normalize_name(alias): normalize_name(canonical)
        for alias, canonical in rows
    }
    logger.debug("Loaded %d aliases for %s", len(table), sport)
    return table


def seed_aliases(session: Session, sport: str, pairs: Optional[list[tuple[str, str]]] = None) -> int:
    """
    Insert alias pairs for a sport, skipping ones already present.

    Args:
        session: SQLAlchemy session (caller commits)
        sport: Sport code, e.g. "NFL"
        pairs: (alias, canonical) display names; defaults to DEFAULT_ALIASES[sport]

    Returns:
        Number of aliases added
    """
    if pairs is None:
        pairs = DEFAULT_ALIASES.get(sport, [])

    existing = {
        alias for (alias,) in session.query(PlayerNameAlias.alias_name).filter(
            PlayerNameAlias.sport == sport
        )
    }

    added = 0
    for alias, canonical in pairs:
        alias_key = normalize_name(alias)
        if not alias_key or alias_key in existing:
            continue
        session.add(PlayerNameAlias(
            sport=sport,
            alias_name=alias_key,
            canonical_name=normalize_name(canonical),
        ))
        existing.add(alias_key)
        added += 1

    session.flush()
    return added
