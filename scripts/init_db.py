#!/usr/bin/env python3
"""
Create the RosterLink tables and seed the alias table.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --sport NFL --no-seed
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rosterlink.config import settings
from rosterlink.db.models import Base
from rosterlink.db.session import get_engine, get_session
from rosterlink.players.aliases import seed_aliases

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed player name aliases")
    parser.add_argument("--sport", default=settings.default_sport,
                        help="Sport whose default aliases should be seeded")
    parser.add_argument("--no-seed", action="store_true",
                        help="Only create tables, do not seed aliases")
    args = parser.parse_args()

    engine = get_engine()
    Base.metadata.create_all(engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

    if args.no_seed:
        return

    with get_session() as session:
        added = seed_aliases(session, args.sport)
    logger.info("Seeded %d %s aliases", added, args.sport)


if __name__ == "__main__":
    main()
