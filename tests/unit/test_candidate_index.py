"""
Unit tests for the provider B candidate index.
"""

from rosterlink.players.index import (
    CandidateIndex,
    full_key,
    name_position_key,
    name_team_key,
)
from rosterlink.players.records import PlayerRecord


def player(source_id, name, team, position):
    first, _, last = name.partition(" ")
    return PlayerRecord(source_id, first or None, last or None, team, position)


class TestKeys:
    """Tests for key construction."""

    def test_full_key_is_plain_concatenation(self):
        record = player("1", "Patrick Mahomes II", "KC", "QB")
        assert full_key(record) == "patrickmahomeskcqb"

    def test_name_position_key_ignores_team(self):
        record = player("1", "DeAndre Hopkins", "TEN", "WR")
        assert name_position_key(record) == "deandrehopkinswr"

    def test_name_team_key_ignores_position(self):
        record = player("1", "Taysom Hill", "NO", "TE")
        assert name_team_key(record) == "taysomhillno"

    def test_team_variants(self):
        record = player("1", "Travis Etienne", "JAC", "RB")
        assert full_key(record) == "travisetiennejacrb"
        assert full_key(record, canonicalize_teams=True) == "travisetiennejaxrb"

    def test_defense_positions_share_key(self):
        espn = player("1", "Chiefs D/ST", "KC", "D/ST")
        fp = player("2", "Chiefs D/ST", "KC", "DEF")
        assert full_key(espn) == full_key(fp)


class TestCandidateIndex:
    """Tests for CandidateIndex.build()."""

    def test_all_views_populated(self):
        records = [
            player("b1", "Josh Allen", "BUF", "QB"),
            player("b2", "Josh Allen", "JAX", "LB"),
            player("b3", "Taysom Hill", "NO", "QB"),
        ]
        index = CandidateIndex.build(records)

        assert len(index) == 3
        assert index.records == records
        assert index.exact["joshallenbufqb"].source_id == "b1"
        assert [r.source_id for r in index.by_name_team["taysomhillno"]] == ["b3"]
        assert [r.source_id for r in index.by_name_position["joshallenqb"]] == ["b1"]

    def test_buckets_keep_input_order(self):
        records = [
            player("b1", "Mike Williams", "LAC", "WR"),
            player("b2", "Mike Williams", "NYJ", "WR"),
        ]
        index = CandidateIndex.build(records)
        bucket = index.by_name_position["mikewilliamswr"]
        assert [r.source_id for r in bucket] == ["b1", "b2"]

    def test_duplicate_full_key_last_wins(self):
        records = [
            player("b1", "Mike Williams", "NYJ", "WR"),
            player("b2", "Mike Williams", "NYJ", "WR"),
        ]
        index = CandidateIndex.build(records)

        assert index.exact["mikewilliamsnyjwr"].source_id == "b2"
        # Both stay reachable through the secondary views
        assert len(index.by_name_position["mikewilliamswr"]) == 2

    def test_empty(self):
        index = CandidateIndex.build([])
        assert len(index) == 0
        assert index.exact == {}
