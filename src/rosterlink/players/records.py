"""
In-memory record types shared by the matching pipeline.

PlayerRecord is the provider-neutral view of one athlete row as published
by either provider. CrosswalkEntry is the output unit of a crosswalk run,
in the shape it is persisted.
"""

from dataclasses import dataclass
from typing import Optional

# Match confidence labels, in the order the cascade tries them
CONFIDENCE_EXACT = "exact"
CONFIDENCE_ALIAS = "alias"
CONFIDENCE_FUZZY = "fuzzy"
CONFIDENCE_CROSS_POSITION = "cross_position"
CONFIDENCE_UNMATCHED = "unmatched"

MATCH_CONFIDENCES = (
    CONFIDENCE_EXACT,
    CONFIDENCE_ALIAS,
    CONFIDENCE_FUZZY,
    CONFIDENCE_CROSS_POSITION,
    CONFIDENCE_UNMATCHED,
)


@dataclass(frozen=True)
class PlayerRecord:
    """
    One athlete as published by a provider for a (sport, season).

    Records are never patched; a provider refresh replaces the whole set.
    """
    source_id: str
    first_name: Optional[str]
    last_name: Optional[str]
    team: Optional[str]
    position: Optional[str]

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def describe(self) -> str:
        """Short label used in notes and log lines."""
        return f"{self.full_name} ({self.team or '-'} {self.position or '-'})"


@dataclass(frozen=True)
class CrosswalkEntry:
    """
    One row of the crosswalk between provider A and provider B.

    At least one of provider_a_id / provider_b_id is always set.
    """
    canonical_key: str
    sport: str
    season: int
    provider_a_id: Optional[str]
    provider_b_id: Optional[str]
    match_confidence: str
    manual_override: bool = False
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.provider_a_id is None and self.provider_b_id is None:
            raise ValueError(
                f"Crosswalk entry '{self.canonical_key}' has neither provider id"
            )
        if self.match_confidence not in MATCH_CONFIDENCES:
            raise ValueError(f"Unknown match confidence: {self.match_confidence}")

    @property
    def is_matched(self) -> bool:
        return self.provider_a_id is not None and self.provider_b_id is not None
