"""
Unit tests for unmatched-entry review suggestions.
"""

from rosterlink.players.aliases import AliasResolver
from rosterlink.players.crosswalk import resolve_crosswalk
from rosterlink.players.records import PlayerRecord
from rosterlink.players.review import ReviewItem, Suggestion, suggest_counterparts


def player(source_id, name, team, position):
    first, _, last = name.partition(" ")
    return PlayerRecord(source_id, first or None, last or None, team, position)


ESPN = [
    player("1", "Kenneth Walker", "SEA", "RB"),
    player("2", "Travis Kelce", "KC", "TE"),
]

FANTASYPROS = [
    player("b1", "Ken Walker", "SEA", "RB"),
    player("b2", "Travis Kelce", "KC", "TE"),
    player("b3", "Josh Allen", "BUF", "QB"),
]


def run_review(**kwargs):
    run = resolve_crosswalk(
        "NFL", 2024, ESPN, FANTASYPROS,
        alias_resolver=AliasResolver(),
        provider_a_name="espn",
        provider_b_name="fantasypros",
    )
    return suggest_counterparts(run.entries, ESPN, FANTASYPROS, threshold=0.8, **kwargs)


class TestSuggestCounterparts:
    """Tests for suggest_counterparts()."""

    def test_items_in_entry_order(self):
        items = run_review()
        assert [(item.side, item.record.source_id) for item in items] == [
            ("a", "1"),
            ("b", "b1"),
            ("b", "b3"),
        ]

    def test_nickname_suggested(self):
        item = run_review()[0]
        assert [s.record.source_id for s in item.suggestions] == ["b1"]
        assert item.suggestions[0].score > 0.8

    def test_matched_records_never_offered(self):
        for item in run_review():
            assert all(s.record.source_id not in ("2", "b2") for s in item.suggestions)

    def test_no_suggestion_below_threshold(self):
        items = run_review()
        assert items[2].suggestions == []

    def test_side_filter(self):
        items = run_review(side="b")
        assert [item.side for item in items] == ["b", "b"]

    def test_limit(self):
        items = run_review(limit=0)
        assert all(item.suggestions == [] for item in items)


class TestReviewItem:
    """Tests for ReviewItem.describe()."""

    def test_describe(self):
        item = ReviewItem(
            "a",
            player("1", "Kenneth Walker", "SEA", "RB"),
            [Suggestion(player("b1", "Ken Walker", "SEA", "RB"), 0.863)],
        )
        assert item.describe() == (
            "[A] 1 Kenneth Walker (SEA RB)\n"
            "    -> b1 Ken Walker (SEA RB) (0.86)"
        )
