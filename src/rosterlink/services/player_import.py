"""
Provider player snapshots - filtering and wholesale replacement.

Each provider refresh produces a complete list of athletes for a
(sport, season). Before the list reaches the crosswalk builder:
- free agents (no recognised team) are dropped
- raw position codes are mapped onto QB/RB/WR/TE/K/DEF ("D/ST" -> "DEF")
- non-fantasy positions (OL, LB, ...) are dropped
- duplicate source ids keep the last row

The stored snapshot for that (provider, sport, season) is then replaced in
full. Nothing here commits; the caller owns the transaction.

Usage:
    with get_session() as session:
        stats = replace_players(session, "espn", "NFL", 2024, rows)
        records = load_players(session, "NFL", 2024, "espn")
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.orm import Session

from rosterlink.db.models import ProviderPlayer
from rosterlink.players.normalize import canonical_position, canonical_team
from rosterlink.players.records import PlayerRecord

logger = logging.getLogger(__name__)


@dataclass
class PlayerImportStats:
    """Statistics from one snapshot replacement."""
    provider: str
    total_rows: int = 0
    imported: int = 0
    rows_deleted: int = 0
    skipped_missing_id: int = 0
    skipped_free_agent: int = 0
    skipped_position: int = 0
    duplicates: int = 0

    def summary(self) -> str:
        """Return a human-readable summary of the import."""
        lines = [
            f"{self.provider} players refresh complete:",
            f"  Rows received:            {self.total_rows}",
            f"  Imported:                 {self.imported}",
            f"  Replaced (old rows):      {self.rows_deleted}",
            f"  Skipped (no id/name):     {self.skipped_missing_id}",
            f"  Skipped (free agent):     {self.skipped_free_agent}",
            f"  Skipped (position):       {self.skipped_position}",
            f"  Duplicate ids:            {self.duplicates}",
        ]
        return "\n".join(lines)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_jersey(value: Any) -> Optional[int]:
    text = _clean(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _split_name(full_name: str) -> tuple[Optional[str], Optional[str]]:
    """'Amon-Ra St. Brown' -> ('Amon-Ra', 'St. Brown')"""
    parts = full_name.split(" ", 1)
    first = parts[0] or None
    last = parts[1].strip() if len(parts) > 1 else None
    return first, last or None


def replace_players(
    session: Session,
    provider: str,
    sport: str,
    season: int,
    rows: Iterable[Mapping[str, Any]],
) -> PlayerImportStats:
    """
    Replace the stored snapshot for (provider, sport, season).

    Args:
        session: SQLAlchemy session (caller commits)
        provider: Provider name, e.g. "espn"
        sport: Sport code, e.g. "NFL"
        season: Season year
        rows: Mappings with source_id, first_name, last_name, full_name,
              team, position and optionally jersey_number

    Returns:
        PlayerImportStats with counts of what happened
    """
    stats = PlayerImportStats(provider=provider)
    kept: dict[str, ProviderPlayer] = {}

    for row in rows:
        stats.total_rows += 1

        source_id = _clean(row.get("source_id"))
        first_name = _clean(row.get("first_name"))
        last_name = _clean(row.get("last_name"))
        full_name = _clean(row.get("full_name"))

        if full_name is None:
            full_name = _clean(f"{first_name or ''} {last_name or ''}")
        elif first_name is None and last_name is None:
            first_name, last_name = _split_name(full_name)

        if source_id is None or full_name is None:
            stats.skipped_missing_id += 1
            continue

        team = canonical_team(row.get("team"))
        if team is None:
            stats.skipped_free_agent += 1
            continue

        position = canonical_position(row.get("position"))
        if position is None:
            stats.skipped_position += 1
            continue

        if source_id in kept:
            stats.duplicates += 1
            logger.debug("Duplicate %s id %s, keeping latest row", provider, source_id)

        kept[source_id] = ProviderPlayer(
            provider=provider,
            sport=sport,
            season=season,
            source_id=source_id,
            first_name=first_name,
            last_name=last_name,
            full_name=full_name,
            team=team,
            position=position,
            jersey_number=_parse_jersey(row.get("jersey_number")),
        )

    stats.rows_deleted = session.query(ProviderPlayer).filter(
        ProviderPlayer.provider == provider,
        ProviderPlayer.sport == sport,
        ProviderPlayer.season == season,
    ).delete()

    session.add_all(kept.values())
    session.flush()
    stats.imported = len(kept)

    logger.info(stats.summary())
    return stats


def load_players(
    session: Session,
    sport: str,
    season: int,
    provider: str,
) -> list[PlayerRecord]:
    """
    Load a provider snapshot as PlayerRecords.

    Rows come back in insertion order so repeated crosswalk runs over the
    same snapshot see the same input order.
    """
    rows = (
        session.query(ProviderPlayer)
        .filter(
            ProviderPlayer.provider == provider,
            ProviderPlayer.sport == sport,
            ProviderPlayer.season == season,
        )
        .order_by(ProviderPlayer.id)
        .all()
    )
    return [
        PlayerRecord(
            source_id=row.source_id,
            first_name=row.first_name,
            last_name=row.last_name,
            team=row.team,
            position=row.position,
        )
        for row in rows
    ]
