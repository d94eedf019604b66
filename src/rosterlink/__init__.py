"""
RosterLink - fantasy player crosswalk between data providers

Joins ESPN fantasy and FantasyPros player data by resolving which records
describe the same athlete, so statistics, rankings and ownership can be
combined per player.

Main components:
- players: Name normalization, alias table and the matching cascade
- services: Provider snapshot import and crosswalk rebuilds
- db: SQLAlchemy models and session management
"""

__version__ = "0.1.0"
