"""
Lookup structures over provider B, built once per crosswalk run.

Each matching pass needs a different view of the candidate pool:
- exact: full key (name + team + position) -> one record
- by_name_position: name + position key -> records (team ignored)
- by_name_team: name + team key -> records (position ignored)

All three are filled in one pass over provider B and never updated
afterwards; consumption is tracked by the matching engine, not here.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from rosterlink.players.normalize import normalize_name, normalize_position, normalize_team
from rosterlink.players.records import PlayerRecord

logger = logging.getLogger(__name__)


def full_key(record: PlayerRecord, canonicalize_teams: bool = False) -> str:
    """Normalized name + team + position."""
    return (
        normalize_name(record.full_name)
        + normalize_team(record.team, canonicalize_teams)
        + normalize_position(record.position)
    )


def name_position_key(record: PlayerRecord) -> str:
    """Normalized name + position, DST/DEF collapsed."""
    return normalize_name(record.full_name) + normalize_position(record.position)


def name_team_key(record: PlayerRecord, canonicalize_teams: bool = False) -> str:
    """Normalized name + team."""
    return normalize_name(record.full_name) + normalize_team(record.team, canonicalize_teams)


@dataclass
class CandidateIndex:
    """Provider B records indexed for the matching passes."""

    records: list[PlayerRecord] = field(default_factory=list)
    exact: dict[str, PlayerRecord] = field(default_factory=dict)
    by_name_position: dict[str, list[PlayerRecord]] = field(default_factory=dict)
    by_name_team: dict[str, list[PlayerRecord]] = field(default_factory=dict)
    canonicalize_teams: bool = False

    @classmethod
    def build(
        cls,
        records: Iterable[PlayerRecord],
        canonicalize_teams: bool = False,
    ) -> "CandidateIndex":
        """
        Index provider B in a single pass.

        Duplicate full keys keep the last record seen. Clean provider data
        never has them, but a duplicate must not abort the run.
        """
        ordered: list[PlayerRecord] = []
        exact: dict[str, PlayerRecord] = {}
        by_name_position: dict[str, list[PlayerRecord]] = defaultdict(list)
        by_name_team: dict[str, list[PlayerRecord]] = defaultdict(list)

        for record in records:
            ordered.append(record)

            key = full_key(record, canonicalize_teams)
            if key in exact:
                logger.debug(
                    "Duplicate full key %s: %s replaces %s",
                    key, record.source_id, exact[key].source_id,
                )
            exact[key] = record

            by_name_position[name_position_key(record)].append(record)
            by_name_team[name_team_key(record, canonicalize_teams)].append(record)

        return cls(
            records=ordered,
            exact=exact,
            by_name_position=dict(by_name_position),
            by_name_team=dict(by_name_team),
            canonicalize_teams=canonicalize_teams,
        )

    def __len__(self) -> int:
        return len(self.records)
