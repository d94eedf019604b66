"""
Crosswalk construction: from matching results to persisted-shape entries.

resolve_crosswalk() is the I/O-free entry point for a whole run:

    run = resolve_crosswalk("NFL", 2024, espn_records, fp_records, resolver)
    run.entries   # list[CrosswalkEntry], provider A order then B-only rows
    run.stats     # CrosswalkStats counters

Loading the inputs and persisting the output is the caller's job (see
rosterlink.services.crosswalk_build).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from rosterlink.config import settings
from rosterlink.players.aliases import AliasResolver
from rosterlink.players.index import CandidateIndex, full_key
from rosterlink.players.matching import MatchContext, MatchingEngine, MatchResult
from rosterlink.players.records import (
    CONFIDENCE_ALIAS,
    CONFIDENCE_CROSS_POSITION,
    CONFIDENCE_EXACT,
    CONFIDENCE_FUZZY,
    CONFIDENCE_UNMATCHED,
    CrosswalkEntry,
    PlayerRecord,
)

logger = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Raised when one side of a crosswalk run has no records."""

    def __init__(self, provider: str, sport: str, season: int):
        self.provider = provider
        self.sport = sport
        self.season = season
        super().__init__(
            f"No {provider} players found for {sport} {season}; "
            f"refresh {provider} players before building the crosswalk"
        )


@dataclass
class CrosswalkStats:
    """Counters from one crosswalk run."""
    total_a: int = 0
    total_b: int = 0
    matched_exact: int = 0
    matched_alias: int = 0
    matched_fuzzy: int = 0
    matched_cross_position: int = 0
    unmatched_a: int = 0
    unmatched_b: int = 0

    @property
    def matched(self) -> int:
        return (
            self.matched_exact
            + self.matched_alias
            + self.matched_fuzzy
            + self.matched_cross_position
        )

    @property
    def unmatched(self) -> int:
        return self.unmatched_a + self.unmatched_b

    @property
    def match_rate(self) -> float:
        """Share of provider A records that found a counterpart."""
        if not self.total_a:
            return 0.0
        return self.matched / self.total_a

    def record(self, result: MatchResult) -> None:
        if result.confidence == CONFIDENCE_EXACT:
            self.matched_exact += 1
        elif result.confidence == CONFIDENCE_ALIAS:
            self.matched_alias += 1
        elif result.confidence == CONFIDENCE_FUZZY:
            self.matched_fuzzy += 1
        elif result.confidence == CONFIDENCE_CROSS_POSITION:
            self.matched_cross_position += 1
        else:
            self.unmatched_a += 1

    def summary(self) -> str:
        """Return a human-readable summary of the run."""
        lines = [
            "Crosswalk build complete:",
            f"  Provider A records:       {self.total_a}",
            f"  Provider B records:       {self.total_b}",
            f"  Matched (exact):          {self.matched_exact}",
            f"  Matched (alias):          {self.matched_alias}",
            f"  Matched (fuzzy):          {self.matched_fuzzy}",
            f"  Matched (cross position): {self.matched_cross_position}",
            f"  Unmatched (A only):       {self.unmatched_a}",
            f"  Unmatched (B only):       {self.unmatched_b}",
            f"  Match rate:               {self.match_rate:.1%}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_a": self.total_a,
            "total_b": self.total_b,
            "matched_exact": self.matched_exact,
            "matched_alias": self.matched_alias,
            "matched_fuzzy": self.matched_fuzzy,
            "matched_cross_position": self.matched_cross_position,
            "unmatched": self.unmatched,
            "match_rate": round(self.match_rate, 4),
        }


@dataclass
class CrosswalkRun:
    """Everything one resolve_crosswalk() call produced."""
    entries: list[CrosswalkEntry] = field(default_factory=list)
    results: list[MatchResult] = field(default_factory=list)
    unmatched_b: list[PlayerRecord] = field(default_factory=list)
    stats: CrosswalkStats = field(default_factory=CrosswalkStats)


def build_entries(
    results: Sequence[MatchResult],
    unmatched_b: Sequence[PlayerRecord],
    sport: str,
    season: int,
    canonicalize_teams: bool = False,
    provider_a_name: Optional[str] = None,
) -> list[CrosswalkEntry]:
    """
    Turn matching results into crosswalk entries.

    One entry per provider A result (keyed on the provider A record), then
    one 'unmatched' entry per provider B record nobody claimed (keyed on
    the provider B record).
    """
    provider_a_name = provider_a_name or settings.provider_a_name
    entries = []

    for result in results:
        entries.append(CrosswalkEntry(
            canonical_key=full_key(result.record_a, canonicalize_teams),
            sport=sport,
            season=season,
            provider_a_id=result.record_a.source_id,
            provider_b_id=result.record_b.source_id if result.record_b else None,
            match_confidence=result.confidence,
            notes=result.note,
        ))

    for record in unmatched_b:
        entries.append(CrosswalkEntry(
            canonical_key=full_key(record, canonicalize_teams),
            sport=sport,
            season=season,
            provider_a_id=None,
            provider_b_id=record.source_id,
            match_confidence=CONFIDENCE_UNMATCHED,
            notes=f"No {provider_a_name} match found for {record.describe()}",
        ))

    return entries


def check_invariants(entries: Sequence[CrosswalkEntry]) -> None:
    """
    Verify the crosswalk invariants.

    Raises:
        ValueError: If an entry has neither provider id, or a provider B id
                    is matched by more than one provider A record
    """
    claimed: dict[str, str] = {}
    for entry in entries:
        if entry.provider_a_id is None and entry.provider_b_id is None:
            raise ValueError(f"Entry '{entry.canonical_key}' has neither provider id")
        if entry.provider_a_id is None or entry.provider_b_id is None:
            continue
        previous = claimed.get(entry.provider_b_id)
        if previous is not None:
            raise ValueError(
                f"Provider B id {entry.provider_b_id} matched by both "
                f"{previous} and {entry.provider_a_id}"
            )
        claimed[entry.provider_b_id] = entry.provider_a_id


def resolve_crosswalk(
    sport: str,
    season: int,
    records_a: Sequence[PlayerRecord],
    records_b: Sequence[PlayerRecord],
    alias_resolver: Optional[AliasResolver] = None,
    canonicalize_teams: Optional[bool] = None,
    provider_a_name: Optional[str] = None,
    provider_b_name: Optional[str] = None,
    allow_empty: bool = False,
) -> CrosswalkRun:
    """
    Resolve provider A records against provider B for one (sport, season).

    Args:
        sport: Sport code, e.g. "NFL"
        season: Season year
        records_a: Provider A records, in the order they should be matched
        records_b: Provider B records
        alias_resolver: Alias table for the sport (none if omitted)
        canonicalize_teams: Fold team code variants; defaults to settings
        provider_a_name: Label used in notes; defaults to settings
        provider_b_name: Label used in notes; defaults to settings
        allow_empty: Accept an empty side. Set by callers that checked the
                     stored snapshots and then filtered them (manual
                     overrides); the other side then comes back unmatched.

    Returns:
        CrosswalkRun with entries, raw results, leftover provider B records
        and stats

    Raises:
        EmptyInputError: If either collection is empty and allow_empty is False
    """
    provider_a_name = provider_a_name or settings.provider_a_name
    provider_b_name = provider_b_name or settings.provider_b_name
    if canonicalize_teams is None:
        canonicalize_teams = settings.crosswalk_canonicalize_teams

    if not allow_empty:
        if not records_a:
            raise EmptyInputError(provider_a_name, sport, season)
        if not records_b:
            raise EmptyInputError(provider_b_name, sport, season)

    index = CandidateIndex.build(records_b, canonicalize_teams=canonicalize_teams)
    engine = MatchingEngine(index, alias_resolver, provider_b_name=provider_b_name)

    context = MatchContext()
    results = engine.match(records_a, context)
    unmatched_b = engine.unconsumed_b(context)

    entries = build_entries(
        results,
        unmatched_b,
        sport,
        season,
        canonicalize_teams=canonicalize_teams,
        provider_a_name=provider_a_name,
    )
    check_invariants(entries)

    stats = CrosswalkStats(total_a=len(records_a), total_b=len(records_b))
    for result in results:
        stats.record(result)
    stats.unmatched_b = len(unmatched_b)

    logger.info(
        "Resolved %s %s: %d entries (%d matched, %d unmatched)",
        sport, season, len(entries), stats.matched, stats.unmatched,
    )
    return CrosswalkRun(entries=entries, results=results, unmatched_b=unmatched_b, stats=stats)
