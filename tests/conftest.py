"""
Shared fixtures for the RosterLink tests.

Database tests run against an in-memory SQLite copy of the player store.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from rosterlink.db.models import Base


@pytest.fixture(scope="session")
def test_engine():
    """In-memory SQLite engine; the models use no PostgreSQL-only types."""
    return create_engine("sqlite:///:memory:", echo=False)


@pytest.fixture(scope="session")
def tables(test_engine):
    """provider_players, player_name_aliases and player_crosswalk."""
    Base.metadata.create_all(test_engine)
    yield
    Base.metadata.drop_all(test_engine)


@pytest.fixture
def db_session(test_engine, tables):
    """
    Session on an outer transaction that is rolled back after the test.

    Services only flush, so snapshots and crosswalk rows a test writes
    never leak into the next one.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()
