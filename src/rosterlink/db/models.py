"""
SQLAlchemy ORM models for RosterLink.

This module defines the player store the crosswalk builder reads from and
writes to.

Key design decisions:
- Both providers share one snapshot table, told apart by the provider column
- Snapshots are replaced wholesale per (provider, sport, season), never patched
- Aliases are sport-scoped reference data, stored already normalized
- Crosswalk rows carry both provider ids (either may be null, not both)

Tables:
- provider_players: Player snapshots from each provider
- player_name_aliases: Provider A spelling -> provider B spelling
- player_crosswalk: Provider A id <-> provider B id mapping per (sport, season)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# =============================================================================
# Provider Snapshot Models
# =============================================================================

class ProviderPlayer(Base):
    """
    One athlete as published by one provider for a (sport, season).

    Free agents and non-fantasy positions are filtered out before rows are
    written (see services/player_import.py), so team and position are
    normally set. Position is stored as the fantasy enum (QB, RB, WR, TE,
    K, DEF) after raw provider codes are mapped.
    """
    __tablename__ = "provider_players"

    id: Mapped[int] = mapped_column(primary_key=True)

    # 'espn' / 'fantasypros' (see settings.provider_a_name / provider_b_name)
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    sport: Mapped[str] = mapped_column(String(20), nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)

    # Provider-native identifier (ESPN ids are numeric, FP ids are slugs)
    source_id: Mapped[str] = mapped_column(String(100), nullable=False)

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    team: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    jersey_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    fetched_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint(
            "provider", "sport", "season", "source_id",
            name="uq_provider_players_source",
        ),
        Index("idx_provider_players_snapshot", "provider", "sport", "season"),
    )

    def __repr__(self) -> str:
        return f"<ProviderPlayer(provider='{self.provider}', id='{self.source_id}', name='{self.full_name}')>"


# =============================================================================
# Alias Models
# =============================================================================

class PlayerNameAlias(Base):
    """
    Pre-seeded name translation from provider A's spelling to provider B's.

    Both names are stored normalized (see players/normalize.py), e.g.
    'gabedavis' -> 'gabrieldavis'. The matching engine reads this table
    but never writes it.
    """
    __tablename__ = "player_name_aliases"

    id: Mapped[int] = mapped_column(primary_key=True)
    sport: Mapped[str] = mapped_column(String(20), nullable=False)
    alias_name: Mapped[str] = mapped_column(String(255), nullable=False)
    canonical_name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("sport", "alias_name", name="uq_player_name_alias"),
    )

    def __repr__(self) -> str:
        return f"<PlayerNameAlias(sport='{self.sport}', '{self.alias_name}' -> '{self.canonical_name}')>"


# =============================================================================
# Crosswalk Models
# =============================================================================

class PlayerCrosswalk(Base):
    """
    Mapping between provider A and provider B player ids.

    Rebuilt wholesale for a (sport, season) on every crosswalk run. Rows with
    manual_override set are human corrections and survive rebuilds.

    match_confidence values:
    - 'exact': name, team and position agree
    - 'alias': matched through player_name_aliases
    - 'fuzzy': name and position agree, team differs
    - 'cross_position': name and team agree, position differs
    - 'unmatched': only one provider has this player
    """
    __tablename__ = "player_crosswalk"

    id: Mapped[int] = mapped_column(primary_key=True)
    canonical_key: Mapped[str] = mapped_column(String(255), nullable=False)
    sport: Mapped[str] = mapped_column(String(20), nullable=False)
    season: Mapped[int] = mapped_column(Integer, nullable=False)

    provider_a_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    provider_b_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    match_confidence: Mapped[str] = mapped_column(String(20), nullable=False)
    manual_override: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "provider_a_id IS NOT NULL OR provider_b_id IS NOT NULL",
            name="ck_player_crosswalk_has_provider_id",
        ),
        Index("idx_player_crosswalk_a", "sport", "season", "provider_a_id"),
        Index("idx_player_crosswalk_b", "sport", "season", "provider_b_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<PlayerCrosswalk(a={self.provider_a_id}, b={self.provider_b_id}, "
            f"conf='{self.match_confidence}')>"
        )
