"""
Unit tests for the alias table and AliasResolver.
"""

import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from rosterlink.db.models import PlayerNameAlias, ProviderPlayer
from rosterlink.players.aliases import (
    DEFAULT_ALIASES,
    AliasResolver,
    load_alias_table,
    seed_aliases,
)


class TestAliasResolver:
    """Tests for in-memory alias resolution."""

    def test_resolves_alias(self):
        resolver = AliasResolver({"gabedavis": "gabrieldavis"})
        assert resolver.resolve("Gabe Davis") == "gabrieldavis"

    def test_no_alias_returns_normalized_name(self):
        resolver = AliasResolver({"gabedavis": "gabrieldavis"})
        assert resolver.resolve("Josh Allen Jr.") == "joshallen"

    def test_display_names_are_normalized(self):
        resolver = AliasResolver({"Hollywood Brown": "Marquise Brown"})
        assert len(resolver) == 1
        assert resolver.resolve("hollywood brown") == "marquisebrown"

    def test_empty_resolver(self):
        resolver = AliasResolver()
        assert len(resolver) == 0
        assert resolver.resolve("Gabe Davis") == "gabedavis"

    def test_blank_alias_ignored(self):
        resolver = AliasResolver({"": "somebody"})
        assert len(resolver) == 0


class TestAliasTable:
    """Tests for loading and seeding the stored alias table."""

    def test_seed_and_load(self, db_session):
        added = seed_aliases(db_session, "NFL")
        assert added == len(DEFAULT_ALIASES["NFL"])

        table = load_alias_table(db_session, "NFL")
        assert table["gabedavis"] == "gabrieldavis"
        assert table["hollywoodbrown"] == "marquisebrown"

    def test_seed_is_idempotent(self, db_session):
        seed_aliases(db_session, "NFL")
        assert seed_aliases(db_session, "NFL") == 0
        assert db_session.query(PlayerNameAlias).count() == len(DEFAULT_ALIASES["NFL"])

    def test_seed_custom_pairs(self, db_session):
        added = seed_aliases(db_session, "NBA", [("Nic Claxton", "Nicolas Claxton")])
        assert added == 1

        row = db_session.query(PlayerNameAlias).filter_by(sport="NBA").one()
        assert row.alias_name == "nicclaxton"
        assert row.canonical_name == "nicolasclaxton"

    def test_load_is_scoped_to_sport(self, db_session):
        seed_aliases(db_session, "NBA", [("Nic Claxton", "Nicolas Claxton")])
        assert load_alias_table(db_session, "NFL") == {}

    def test_from_session(self, db_session):
        seed_aliases(db_session, "NFL")
        resolver = AliasResolver.from_session(db_session, "NFL")
        assert resolver.resolve("Tank Dell") == "nathanieldell"


class TestMissingAliasTable:
    """Tests that a missing alias table degrades to no aliases."""

    @pytest.fixture
    def session_without_aliases(self):
        engine = create_engine("sqlite:///:memory:")
        ProviderPlayer.__table__.create(engine)
        session = sessionmaker(bind=engine)()
        yield session
        session.close()
        engine.dispose()

    def test_missing_table_returns_empty(self, session_without_aliases, caplog):
        caplog.set_level(logging.WARNING, logger="rosterlink.players.aliases")

        assert load_alias_table(session_without_aliases, "NFL") == {}
        assert "Alias table missing" in caplog.text

    def test_resolver_from_missing_table(self, session_without_aliases):
        resolver = AliasResolver.from_session(session_without_aliases, "NFL")
        assert len(resolver) == 0
        assert resolver.resolve("Gabe Davis") == "gabedavis"
