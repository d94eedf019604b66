"""
Crosswalk build service - rebuilds the stored crosswalk for a (sport, season).

The workflow:
    Load provider A + provider B snapshots and the alias table
    → resolve_crosswalk() (pure, in memory)
    → delete the old crosswalk rows and insert the new ones

Everything happens inside the caller's session, so with get_session() the
old crosswalk stays fully visible until the new one is committed in one go.
If either snapshot is empty, EmptyInputError propagates and nothing is
written.

Rows flagged manual_override are human corrections. They are kept as they
are, and the provider ids they pin are taken out of the matching inputs so
the engine cannot hand the same player to someone else. If the overrides pin
a whole side, the rest of the other side is still written as unmatched.

Usage:
    from rosterlink.services.crosswalk_build import build_crosswalk

    with get_session() as session:
        stats = build_crosswalk(session, "NFL", 2024)
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from rosterlink.config import settings
from rosterlink.db.models import PlayerCrosswalk
from rosterlink.players.aliases import AliasResolver
from rosterlink.players.crosswalk import (
    CrosswalkRun,
    CrosswalkStats,
    EmptyInputError,
    check_invariants,
    resolve_crosswalk,
)
from rosterlink.players.records import CrosswalkEntry
from rosterlink.services.player_import import load_players

logger = logging.getLogger(__name__)


@dataclass
class CrosswalkBuildStats:
    """Statistics from one persisted crosswalk rebuild."""
    sport: str
    season: int
    run: CrosswalkStats = field(default_factory=CrosswalkStats)
    rows_deleted: int = 0
    rows_inserted: int = 0
    overrides_kept: int = 0
    aliases_loaded: int = 0

    def summary(self) -> str:
        """Return a human-readable summary of the rebuild."""
        lines = [
            f"Crosswalk rebuild for {self.sport} {self.season}:",
            f"  Aliases loaded:           {self.aliases_loaded}",
            f"  Manual overrides kept:    {self.overrides_kept}",
            f"  Old rows deleted:         {self.rows_deleted}",
            f"  New rows inserted:        {self.rows_inserted}",
        ]
        return "\n".join(lines) + "\n" + self.run.summary()


def _to_row(entry: CrosswalkEntry) -> PlayerCrosswalk:
    return PlayerCrosswalk(
        canonical_key=entry.canonical_key,
        sport=entry.sport,
        season=entry.season,
        provider_a_id=entry.provider_a_id,
        provider_b_id=entry.provider_b_id,
        match_confidence=entry.match_confidence,
        manual_override=entry.manual_override,
        notes=entry.notes,
    )


def _to_entry(row: PlayerCrosswalk) -> CrosswalkEntry:
    return CrosswalkEntry(
        canonical_key=row.canonical_key,
        sport=row.sport,
        season=row.season,
        provider_a_id=row.provider_a_id,
        provider_b_id=row.provider_b_id,
        match_confidence=row.match_confidence,
        manual_override=bool(row.manual_override),
        notes=row.notes,
    )


def _crosswalk_query(session: Session, sport: str, season: int):
    return session.query(PlayerCrosswalk).filter(
        PlayerCrosswalk.sport == sport,
        PlayerCrosswalk.season == season,
    )


def build_crosswalk(
    session: Session,
    sport: str,
    season: int,
    canonicalize_teams: Optional[bool] = None,
) -> CrosswalkBuildStats:
    """
    Rebuild and store the crosswalk for (sport, season).

    Args:
        session: SQLAlchemy session; the caller commits
        sport: Sport code, e.g. "NFL"
        season: Season year
        canonicalize_teams: Fold team code variants; defaults to settings

    Returns:
        CrosswalkBuildStats with run counters and row counts

    Raises:
        EmptyInputError: If either provider has no players for (sport, season)
    """
    provider_a = settings.provider_a_name
    provider_b = settings.provider_b_name

    records_a = load_players(session, sport, season, provider_a)
    records_b = load_players(session, sport, season, provider_b)
    if not records_a:
        raise EmptyInputError(provider_a, sport, season)
    if not records_b:
        raise EmptyInputError(provider_b, sport, season)

    overrides = (
        _crosswalk_query(session, sport, season)
        .filter(PlayerCrosswalk.manual_override.is_(True))
        .order_by(PlayerCrosswalk.id)
        .all()
    )
    pinned_a = {row.provider_a_id for row in overrides if row.provider_a_id}
    pinned_b = {row.provider_b_id for row in overrides if row.provider_b_id}
    if overrides:
        records_a = [record for record in records_a if record.source_id not in pinned_a]
        records_b = [record for record in records_b if record.source_id not in pinned_b]

    alias_resolver = AliasResolver.from_session(session, sport)

    run: CrosswalkRun = resolve_crosswalk(
        sport,
        season,
        records_a,
        records_b,
        alias_resolver=alias_resolver,
        canonicalize_teams=canonicalize_teams,
        provider_a_name=provider_a,
        provider_b_name=provider_b,
        allow_empty=True,
    )
    check_invariants([_to_entry(row) for row in overrides] + run.entries)

    stats = CrosswalkBuildStats(
        sport=sport,
        season=season,
        run=run.stats,
        overrides_kept=len(overrides),
        aliases_loaded=len(alias_resolver),
    )

    stats.rows_deleted = (
        _crosswalk_query(session, sport, season)
        .filter(PlayerCrosswalk.manual_override.is_(False))
        .delete()
    )
    session.add_all(_to_row(entry) for entry in run.entries)
    session.flush()
    stats.rows_inserted = len(run.entries)

    logger.info(stats.summary())
    if run.stats.total_a and run.stats.match_rate < settings.crosswalk_min_match_rate:
        logger.warning(
            "Low crosswalk match rate for %s %s: %.1f%% (threshold %.1f%%)",
            sport, season,
            run.stats.match_rate * 100,
            settings.crosswalk_min_match_rate * 100,
        )

    return stats


def load_crosswalk(session: Session, sport: str, season: int) -> list[CrosswalkEntry]:
    """Load the stored crosswalk for (sport, season), in insertion order."""
    rows = _crosswalk_query(session, sport, season).order_by(PlayerCrosswalk.id).all()
    return [_to_entry(row) for row in rows]
