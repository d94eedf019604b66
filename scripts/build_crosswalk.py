#!/usr/bin/env python3
"""
Rebuild the player crosswalk for a sport and season.

Usage:
    python scripts/build_crosswalk.py
    python scripts/build_crosswalk.py --sport NFL --season 2024
    python scripts/build_crosswalk.py --dry-run
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rosterlink.config import settings
from rosterlink.db.session import get_session
from rosterlink.players.crosswalk import EmptyInputError
from rosterlink.services.crosswalk_build import build_crosswalk

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


class DryRunRollback(Exception):
    """Raised to roll back the rebuild after reporting."""


def main():
    parser = argparse.ArgumentParser(description="Rebuild the ESPN / FantasyPros player crosswalk")
    parser.add_argument("--sport", default=settings.default_sport)
    parser.add_argument("--season", type=int, default=settings.default_season)
    parser.add_argument("--dry-run", action="store_true",
                        help="Run the matching and report, but do not save the crosswalk")
    parser.add_argument("--json", action="store_true",
                        help="Print the run counters as JSON")
    args = parser.parse_args()

    try:
        with get_session() as session:
            stats = build_crosswalk(session, args.sport, args.season)
            if args.dry_run:
                raise DryRunRollback()
    except DryRunRollback:
        logger.info("Dry run - crosswalk changes rolled back")
    except EmptyInputError as exc:
        logger.error("Crosswalk not built: %s", exc)
        sys.exit(1)

    if args.json:
        print(json.dumps(stats.run.to_dict(), indent=2))


if __name__ == "__main__":
    main()
