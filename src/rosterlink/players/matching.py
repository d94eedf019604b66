"""
The matching cascade that pairs provider A records with provider B records.

For every provider A record, in input order, the engine tries:
1. Exact - full key (name + team + position) agrees
2. Alias - pre-seeded alias translates the name, team must agree
3. Name + position - team ignored (stale team assignments)
4. Name + team - position ignored (two-way players, position reclassified)

The first pass that finds an unconsumed provider B record wins, and that
record is consumed immediately so no later provider A record can claim it.
Records that no pass can place come back as 'unmatched'.

Run state (the consumed set) lives in a MatchContext that is created per
run and threaded through every pass. An engine instance holds only
read-only inputs, so separate runs never share mutable state.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from rosterlink.config import settings
from rosterlink.players.aliases import AliasResolver
from rosterlink.players.index import (
    CandidateIndex,
    full_key,
    name_position_key,
    name_team_key,
)
from rosterlink.players.normalize import normalize_name, normalize_position, normalize_team
from rosterlink.players.records import (
    CONFIDENCE_ALIAS,
    CONFIDENCE_CROSS_POSITION,
    CONFIDENCE_EXACT,
    CONFIDENCE_FUZZY,
    CONFIDENCE_UNMATCHED,
    PlayerRecord,
)

logger = logging.getLogger(__name__)

# Tie-break order for several name+team candidates at different positions
POSITION_PRIORITY: tuple[str, ...] = ("WR", "RB", "QB", "TE", "K", "DEF")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one provider A record."""
    record_a: PlayerRecord
    record_b: Optional[PlayerRecord]
    confidence: str
    note: Optional[str] = None

    def __repr__(self) -> str:
        b_id = self.record_b.source_id if self.record_b else None
        return f"<MatchResult(a={self.record_a.source_id}, b={b_id}, conf='{self.confidence}')>"


@dataclass
class MatchContext:
    """Mutable state for a single crosswalk run."""
    consumed_b: set[str] = field(default_factory=set)

    def is_available(self, record: PlayerRecord) -> bool:
        return record.source_id not in self.consumed_b

    def consume(self, record: PlayerRecord) -> None:
        self.consumed_b.add(record.source_id)


def position_priority(position: Optional[str], order: Sequence[str] = POSITION_PRIORITY) -> int:
    """
    Rank a position for cross-position tie-breaks; lower wins.

    Positions outside the order rank after every listed one.
    """
    code = normalize_position(position).upper()
    try:
        return list(order).index(code)
    except ValueError:
        return len(order)


def rank_by_position(
    candidates: Sequence[PlayerRecord],
    order: Sequence[str] = POSITION_PRIORITY,
) -> list[PlayerRecord]:
    """Order candidates by position priority, then by their input order."""
    ranked = sorted(
        enumerate(candidates),
        key=lambda item: (position_priority(item[1].position, order), item[0]),
    )
    return [record for _, record in ranked]


class MatchingEngine:
    """
    Run the matching cascade for one (sport, season).

    Usage:
        index = CandidateIndex.build(fp_records)
        engine = MatchingEngine(index, AliasResolver(alias_table))

        context = MatchContext()
        results = engine.match(espn_records, context)
        leftovers = engine.unconsumed_b(context)
    """

    def __init__(
        self,
        index: CandidateIndex,
        alias_resolver: Optional[AliasResolver] = None,
        provider_b_name: Optional[str] = None,
        position_order: Sequence[str] = POSITION_PRIORITY,
    ):
        self.index = index
        self.alias_resolver = alias_resolver or AliasResolver()
        self.provider_b_name = provider_b_name or settings.provider_b_name
        self.position_order = tuple(position_order)
        self.canonicalize_teams = index.canonicalize_teams

        # Order is significant: first success wins
        self._passes: tuple[Callable[[PlayerRecord, MatchContext], Optional[MatchResult]], ...] = (
            self.match_exact,
            self.match_alias,
            self.match_name_position,
            self.match_name_team,
        )

    # =========================================================================
    # Main Public Methods
    # =========================================================================

    def match(
        self,
        records_a: Sequence[PlayerRecord],
        context: Optional[MatchContext] = None,
    ) -> list[MatchResult]:
        """
        Match every provider A record, in input order.

        Args:
            records_a: Provider A records
            context: Run state; pass your own to inspect consumption afterwards

        Returns:
            One MatchResult per provider A record, same order as the input
        """
        if context is None:
            context = MatchContext()

        results = []
        for record in records_a:
            result = self._first_match(record, context) or self._unmatched(record)
            logger.debug("%s -> %r", record.describe(), result)
            results.append(result)

        return results

    def unconsumed_b(self, context: MatchContext) -> list[PlayerRecord]:
        """Provider B records no provider A record claimed, in input order."""
        return [record for record in self.index.records if context.is_available(record)]

    # =========================================================================
    # Matching Passes
    # =========================================================================

    def match_exact(self, record: PlayerRecord, context: MatchContext) -> Optional[MatchResult]:
        """Pass 1: name, team and position all agree."""
        candidate = self.index.exact.get(full_key(record, self.canonicalize_teams))
        if candidate is None or not context.is_available(candidate):
            return None
        return MatchResult(record, candidate, CONFIDENCE_EXACT)

    def match_alias(self, record: PlayerRecord, context: MatchContext) -> Optional[MatchResult]:
        """
        Pass 2: translate the name through the alias table.

        Only used when the alias actually changes the name, and the team
        must still agree so a translated name alone never decides a match.
        """
        own_name = normalize_name(record.full_name)
        translated = self.alias_resolver.resolve(record.full_name)
        if translated == own_name:
            return None

        team = self._team(record.team)
        if not team:
            return None

        for candidate in self.index.records:
            if not context.is_available(candidate):
                continue
            if normalize_name(candidate.full_name) != translated:
                continue
            if self._team(candidate.team) != team:
                continue
            return MatchResult(
                record,
                candidate,
                CONFIDENCE_ALIAS,
                f"Alias match: '{record.full_name}' -> '{translated}'",
            )

        return None

    def match_name_position(self, record: PlayerRecord, context: MatchContext) -> Optional[MatchResult]:
        """
        Pass 3: name and position agree, team may not.

        Covers stale team assignments after trades and signings. With
        several candidates, one on the provider A team is preferred.
        """
        candidates = self._available(
            self.index.by_name_position.get(name_position_key(record), []),
            context,
        )
        if not candidates:
            return None

        if len(candidates) == 1:
            candidate = candidates[0]
            return MatchResult(
                record,
                candidate,
                CONFIDENCE_FUZZY,
                self._team_note(record, candidate),
            )

        team = self._team(record.team)
        for candidate in candidates:
            if team and self._team(candidate.team) == team:
                # Name, team and position all agree even though the lookup
                # went through the name+position index
                return MatchResult(
                    record,
                    candidate,
                    CONFIDENCE_EXACT,
                    f"Resolved via name+position index ({len(candidates)} candidates)",
                )

        candidate = candidates[0]
        note = f"{len(candidates)} name+position candidates; picked first"
        team_note = self._team_note(record, candidate)
        if team_note:
            note = f"{note}. {team_note}"
        return MatchResult(record, candidate, CONFIDENCE_FUZZY, note)

    def match_name_team(self, record: PlayerRecord, context: MatchContext) -> Optional[MatchResult]:
        """
        Pass 4: name and team agree, position is ignored.

        Several candidates are ranked by POSITION_PRIORITY.
        """
        candidates = self._available(
            self.index.by_name_team.get(name_team_key(record, self.canonicalize_teams), []),
            context,
        )
        if not candidates:
            return None

        if len(candidates) == 1:
            candidate = candidates[0]
            return MatchResult(
                record,
                candidate,
                CONFIDENCE_CROSS_POSITION,
                self._position_note(record, candidate),
            )

        candidate = rank_by_position(candidates, self.position_order)[0]
        note = (
            f"{len(candidates)} name+team candidates; "
            f"picked {candidate.position or '-'} by position priority"
        )
        position_note = self._position_note(record, candidate)
        if position_note:
            note = f"{note}. {position_note}"
        return MatchResult(record, candidate, CONFIDENCE_CROSS_POSITION, note)

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _first_match(self, record: PlayerRecord, context: MatchContext) -> Optional[MatchResult]:
        # A record with no usable name would key on team/position alone
        if not normalize_name(record.full_name):
            return None

        for match_pass in self._passes:
            result = match_pass(record, context)
            if result is not None:
                context.consume(result.record_b)
                return result
        return None

    def _unmatched(self, record: PlayerRecord) -> MatchResult:
        return MatchResult(
            record,
            None,
            CONFIDENCE_UNMATCHED,
            f"No {self.provider_b_name} match found for {record.describe()}",
        )

    def _available(
        self,
        candidates: list[PlayerRecord],
        context: MatchContext,
    ) -> list[PlayerRecord]:
        return [candidate for candidate in candidates if context.is_available(candidate)]

    def _team(self, team: Optional[str]) -> str:
        return normalize_team(team, self.canonicalize_teams)

    def _team_note(self, record: PlayerRecord, candidate: PlayerRecord) -> Optional[str]:
        if self._team(record.team) == self._team(candidate.team):
            return None
        return f"Team mismatch: A({record.team or '-'}) vs B({candidate.team or '-'})"

    def _position_note(self, record: PlayerRecord, candidate: PlayerRecord) -> Optional[str]:
        if normalize_position(record.position) == normalize_position(candidate.position):
            return None
        return f"Position mismatch: A({record.position or '-'}) vs B({candidate.position or '-'})"
