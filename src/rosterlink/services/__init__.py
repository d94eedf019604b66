"""
Services module for RosterLink.

Persistence-facing workflows around the matching engine:
- player_import: Filter and replace provider player snapshots
- crosswalk_build: Rebuild and store the crosswalk for a (sport, season)
"""

from rosterlink.services.crosswalk_build import build_crosswalk, load_crosswalk
from rosterlink.services.player_import import load_players, replace_players

__all__ = [
    "build_crosswalk",
    "load_crosswalk",
    "load_players",
    "replace_players",
]
