#!/usr/bin/env python3
"""
Load a provider player export (CSV) into the player store.

The CSV needs a header row. Recognised columns: source_id (or id),
first_name, last_name, full_name (or name), team, position, jersey_number.
The stored snapshot for (provider, sport, season) is replaced in full.

Usage:
    python scripts/import_players.py --provider espn espn_players.csv
    python scripts/import_players.py --provider fantasypros --season 2024 fp_players.csv
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rosterlink.config import settings
from rosterlink.db.session import get_session
from rosterlink.services.player_import import replace_players

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# Alternate header names seen in provider exports
COLUMN_ALIASES = {
    "id": "source_id",
    "player_id": "source_id",
    "name": "full_name",
    "player": "full_name",
    "pos": "position",
    "jersey": "jersey_number",
}


def read_rows(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        rows = []
        for raw in reader:
            row = {}
            for column, value in raw.items():
                if column is None:
                    continue
                key = column.strip().lower()
                row[COLUMN_ALIASES.get(key, key)] = value
            rows.append(row)
    return rows


def main():
    parser = argparse.ArgumentParser(description="Import a provider player CSV")
    parser.add_argument("csv_path", type=Path, help="CSV export to import")
    parser.add_argument("--provider", required=True,
                        choices=[settings.provider_a_name, settings.provider_b_name],
                        help="Which provider the export came from")
    parser.add_argument("--sport", default=settings.default_sport)
    parser.add_argument("--season", type=int, default=settings.default_season)
    args = parser.parse_args()

    if not args.csv_path.exists():
        logger.error("File not found: %s", args.csv_path)
        sys.exit(1)

    rows = read_rows(args.csv_path)
    logger.info("Read %d rows from %s", len(rows), args.csv_path)

    with get_session() as session:
        replace_players(session, args.provider, args.sport, args.season, rows)


if __name__ == "__main__":
    main()
