"""
Review helpers for unmatched crosswalk entries.

The cascade deliberately never scores names, so a nickname that is missing
from the alias table ("Hollywood Brown" vs "Marquise Brown") leaves two
unmatched rows behind. This module suggests likely counterparts for those
rows so an operator can add an alias or a manual override. Suggestions are
advisory only and are never written to the crosswalk.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from rosterlink.players.normalize import compare_names
from rosterlink.players.records import CrosswalkEntry, PlayerRecord


@dataclass(frozen=True)
class Suggestion:
    """A possible counterpart for an unmatched record."""
    record: PlayerRecord
    score: float


@dataclass
class ReviewItem:
    """One unmatched record and its best-scoring counterparts."""
    side: str  # 'a' or 'b'
    record: PlayerRecord
    suggestions: list[Suggestion] = field(default_factory=list)

    def describe(self) -> str:
        lines = [f"[{self.side.upper()}] {self.record.source_id} {self.record.describe()}"]
        for suggestion in self.suggestions:
            lines.append(
                f"    -> {suggestion.record.source_id} {suggestion.record.describe()} "
                f"({suggestion.score:.2f})"
            )
        return "\n".join(lines)


def _rank(
    record: PlayerRecord,
    pool: Sequence[PlayerRecord],
    threshold: float,
    limit: int,
) -> list[Suggestion]:
    scored = []
    for candidate in pool:
        score = compare_names(record.full_name, candidate.full_name)
        if score >= threshold:
            scored.append(Suggestion(candidate, score))

    # Stable sort keeps pool order among equal scores
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]


def suggest_counterparts(
    entries: Sequence[CrosswalkEntry],
    records_a: Sequence[PlayerRecord],
    records_b: Sequence[PlayerRecord],
    threshold: float = 0.85,
    limit: int = 3,
    side: Optional[str] = None,
) -> list[ReviewItem]:
    """
    Suggest counterparts for every unmatched entry.

    Each unmatched provider A record is scored against the unmatched
    provider B records and vice versa; matched records are never offered.

    Args:
        entries: Crosswalk entries from a run (or loaded from the store)
        records_a: Provider A records the entries were built from
        records_b: Provider B records the entries were built from
        threshold: Minimum name similarity to suggest
        limit: Maximum suggestions per record
        side: Restrict to 'a' or 'b' unmatched records

    Returns:
        ReviewItems in entry order, including ones with no suggestions
    """
    a_by_id = {record.source_id: record for record in records_a}
    b_by_id = {record.source_id: record for record in records_b}

    unmatched = [entry for entry in entries if not entry.is_matched]
    open_a = [
        a_by_id[entry.provider_a_id] for entry in unmatched
        if entry.provider_a_id in a_by_id
    ]
    open_b = [
        b_by_id[entry.provider_b_id] for entry in unmatched
        if entry.provider_b_id in b_by_id
    ]

    items = []
    for entry in unmatched:
        if entry.provider_a_id is not None and side in (None, "a"):
            record = a_by_id.get(entry.provider_a_id)
            if record is not None:
                items.append(ReviewItem("a", record, _rank(record, open_b, threshold, limit)))
        elif entry.provider_b_id is not None and side in (None, "b"):
            record = b_by_id.get(entry.provider_b_id)
            if record is not None:
                items.append(ReviewItem("b", record, _rank(record, open_a, threshold, limit)))

    return items
