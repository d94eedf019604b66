#!/usr/bin/env python3
"""
List unmatched crosswalk rows with likely counterparts from the other provider.

Useful after a rebuild to find nicknames that belong in the alias table.

Usage:
    python scripts/check_unmatched.py
    python scripts/check_unmatched.py --side a --threshold 0.8
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rosterlink.config import settings
from rosterlink.db.session import get_session
from rosterlink.players.review import suggest_counterparts
from rosterlink.services.crosswalk_build import load_crosswalk
from rosterlink.services.player_import import load_players

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Review unmatched crosswalk rows")
    parser.add_argument("--sport", default=settings.default_sport)
    parser.add_argument("--season", type=int, default=settings.default_season)
    parser.add_argument("--side", choices=["a", "b"], default=None,
                        help="Only show unmatched rows from one provider")
    parser.add_argument("--threshold", type=float, default=settings.crosswalk_suggestion_threshold,
                        help="Minimum name similarity for a suggestion")
    parser.add_argument("--limit", type=int, default=3,
                        help="Maximum suggestions per row")
    args = parser.parse_args()

    with get_session() as session:
        entries = load_crosswalk(session, args.sport, args.season)
        records_a = load_players(session, args.sport, args.season, settings.provider_a_name)
        records_b = load_players(session, args.sport, args.season, settings.provider_b_name)

    if not entries:
        logger.warning("No crosswalk for %s %s; run build_crosswalk.py first", args.sport, args.season)
        return

    items = suggest_counterparts(
        entries,
        records_a,
        records_b,
        threshold=args.threshold,
        limit=args.limit,
        side=args.side,
    )

    with_suggestions = 0
    for item in items:
        print(item.describe())
        if item.suggestions:
            with_suggestions += 1

    logger.info(
        "%d unmatched rows, %d with suggested counterparts (A=%s, B=%s)",
        len(items), with_suggestions, settings.provider_a_name, settings.provider_b_name,
    )


if __name__ == "__main__":
    main()
