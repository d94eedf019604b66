"""
Player name, team and position normalization.

The two providers publish the same athlete in slightly different shapes:
- ESPN: "Kenneth Walker III", team "SEA", position "RB"
- FantasyPros: "Kenneth Walker", team "SEA", position "RB"
- Defenses: "D/ST" on one side, "DST" or "DEF" on the other
- Relocated / legacy team codes: "JAC" vs "JAX", "WSH" vs "WAS"

Everything in this module is a total function: any input (including None
and the empty string) produces a string, never an exception. Matching keys
are built from these normalized forms; stored records keep the raw values.
"""

import re
import unicodedata
from typing import Optional

import jellyfish
from rapidfuzz import fuzz

# Longest tokens first so " iii" wins over " ii" and " jr." over " jr"
NAME_SUFFIXES = (
    " junior",
    " senior",
    " iii",
    " jr.",
    " sr.",
    " ii",
    " iv",
    " jr",
    " sr",
    " v",
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_OR_SPACE = re.compile(r"[^a-z0-9 ]")

# First entry of each list is the canonical code
TEAM_ABBREVIATIONS: dict[str, list[str]] = {
    "ARI": ["ARI", "ARZ"],
    "ATL": ["ATL"],
    "BAL": ["BAL"],
    "BUF": ["BUF"],
    "CAR": ["CAR"],
    "CHI": ["CHI"],
    "CIN": ["CIN"],
    "CLE": ["CLE"],
    "DAL": ["DAL"],
    "DEN": ["DEN"],
    "DET": ["DET"],
    "GB": ["GB", "GBP"],
    "HOU": ["HOU"],
    "IND": ["IND"],
    "JAX": ["JAX", "JAC"],
    "KC": ["KC", "KCC"],
    "LAC": ["LAC", "SD", "SDC"],
    "LAR": ["LAR", "LA", "STL"],
    "LV": ["LV", "OAK", "LVR"],
    "MIA": ["MIA"],
    "MIN": ["MIN"],
    "NE": ["NE", "NEP"],
    "NO": ["NO", "NOS"],
    "NYG": ["NYG"],
    "NYJ": ["NYJ"],
    "PHI": ["PHI"],
    "PIT": ["PIT"],
    "SF": ["SF", "SFO"],
    "SEA": ["SEA"],
    "TB": ["TB", "TBB"],
    "TEN": ["TEN"],
    "WAS": ["WAS", "WSH"],
}

_TEAM_VARIANT_TO_CANONICAL: dict[str, str] = {
    variant: canonical
    for canonical, variants in TEAM_ABBREVIATIONS.items()
    for variant in variants
}

FANTASY_POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF")

# Raw provider position codes -> fantasy position enum
POSITION_SYNONYMS: dict[str, str] = {
    "QB": "QB",
    "RB": "RB",
    "HB": "RB",
    "FB": "RB",
    "WR": "WR",
    "TE": "TE",
    "K": "K",
    "PK": "K",
    "DEF": "DEF",
    "DST": "DEF",
    "D/ST": "DEF",
    "D": "DEF",
}


def _strip_accents(text: str) -> str:
    # NFD splits "é" into "e" + combining accent; drop the combining marks
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if unicodedata.category(char) != "Mn")


def _strip_suffix(name: str) -> str:
    for suffix in NAME_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def fold_name(text: Optional[str]) -> str:
    """
    Lowercase, de-accent and de-suffix a name, keeping word boundaries.

    This is the readable form used for name similarity and display in
    review output. Matching keys use normalize_name(), which additionally
    removes the spaces.

    Examples:
        >>> fold_name("Kenneth Walker III")
        'kenneth walker'
        >>> fold_name("  Amon-Ra   St. Brown ")
        'amonra st brown'
    """
    if not text:
        return ""

    folded = _strip_accents(text.lower().strip())
    folded = " ".join(folded.split())
    folded = _strip_suffix(folded)
    folded = _NON_ALNUM_OR_SPACE.sub("", folded)
    return " ".join(folded.split())


def normalize_name(text: Optional[str]) -> str:
    """
    Canonicalize a player name into a comparison-safe key fragment.

    Steps, in order:
    1. Lowercase (and drop accents)
    2. Strip one trailing generational suffix (Jr., Sr., II-V, Junior, Senior)
    3. Remove every character outside [a-z0-9], whitespace included

    Examples:
        >>> normalize_name("Patrick Mahomes II")
        'patrickmahomes'
        >>> normalize_name("D.J. Moore")
        'djmoore'
        >>> normalize_name("")
        ''
    """
    return _NON_ALNUM.sub("", fold_name(text))


def normalize_team(text: Optional[str], canonicalize: bool = False) -> str:
    """
    Normalize a team abbreviation for key construction.

    Character stripping only, no suffix removal, so by default "JAC" and
    "JAX" stay different and a variant code reads as a team mismatch.
    With canonicalize=True, known legacy or alternate codes fold onto the
    current code first.
    """
    if not text:
        return ""

    stripped = _NON_ALNUM.sub("", text.lower())
    if canonicalize:
        canonical = _TEAM_VARIANT_TO_CANONICAL.get(stripped.upper())
        if canonical:
            return canonical.lower()
    return stripped


def normalize_position(text: Optional[str]) -> str:
    """
    Normalize a position code for key construction.

    DST and DEF (and ESPN's D/ST) collapse onto "def".
    """
    if not text:
        return ""

    stripped = _NON_ALNUM.sub("", text.lower())
    if stripped in ("dst", "def"):
        return "def"
    return stripped


def canonical_team(raw: Optional[str]) -> Optional[str]:
    """
    Map any known team abbreviation variant to its canonical code.

    Returns None for free agents, blank values and unknown codes.
    """
    if not raw:
        return None
    return _TEAM_VARIANT_TO_CANONICAL.get(raw.strip().upper())


def canonical_position(raw: Optional[str]) -> Optional[str]:
    """
    Map a raw provider position code onto the fantasy position enum.

    Returns None for positions that are not fantasy relevant.
    """
    if not raw:
        return None
    return POSITION_SYNONYMS.get(raw.strip().upper())


def compare_names(name1: str, name2: str) -> float:
    """
    Compare two player names and return a similarity score.

    Only used to suggest counterparts for unmatched records; the matching
    cascade itself never scores names. Takes the best of:
    1. Jaro-Winkler: typos and minor variations
    2. Token sort ratio: word order differences
    3. Partial ratio: nicknames contained in the legal name ("gabe" / "gabriel")

    Returns:
        Similarity score from 0.0 (no match) to 1.0 (identical after folding)
    """
    n1 = fold_name(name1)
    n2 = fold_name(name2)

    if not n1 or not n2:
        return 0.0

    if n1 == n2:
        return 1.0

    jw_score = jellyfish.jaro_winkler_similarity(n1, n2)
    token_sort = fuzz.token_sort_ratio(n1, n2) / 100.0
    partial = fuzz.partial_ratio(n1, n2) / 100.0

    return max(jw_score, token_sort, partial)
