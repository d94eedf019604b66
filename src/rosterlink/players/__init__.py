"""
Player identity resolution between two fantasy data providers.

ESPN and FantasyPros describe the same athletes with different ids,
spellings, team codes and position codes. This module decides, for every
provider A record, which provider B record (if any) is the same athlete.

Key components:
- normalize_name / normalize_team / normalize_position: comparison-safe keys
- AliasResolver: pre-seeded nickname -> legal name translations
- CandidateIndex: provider B lookups by full key, name+position, name+team
- MatchingEngine: the matching cascade
- resolve_crosswalk: one full run, returning CrosswalkEntry rows and stats

The matching strategy (in priority order):
1. Exact name + team + position
2. Alias-translated name + team
3. Name + position (team differs)
4. Name + team (position differs)
5. Unmatched
"""

from rosterlink.players.aliases import AliasResolver
from rosterlink.players.crosswalk import (
    CrosswalkRun,
    CrosswalkStats,
    EmptyInputError,
    resolve_crosswalk,
)
from rosterlink.players.index import CandidateIndex
from rosterlink.players.matching import MatchContext, MatchingEngine, MatchResult
from rosterlink.players.normalize import normalize_name, normalize_position, normalize_team
from rosterlink.players.records import CrosswalkEntry, PlayerRecord

__all__ = [
    "AliasResolver",
    "CandidateIndex",
    "CrosswalkEntry",
    "CrosswalkRun",
    "CrosswalkStats",
    "EmptyInputError",
    "MatchContext",
    "MatchingEngine",
    "MatchResult",
    "PlayerRecord",
    "normalize_name",
    "normalize_position",
    "normalize_team",
    "resolve_crosswalk",
]
