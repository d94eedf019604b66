"""
Unit tests for name, team and position normalization.

Every matching key is built from these functions, so small regressions
here silently change which players the crosswalk pairs up.
"""

from rosterlink.players.normalize import (
    canonical_position,
    canonical_team,
    compare_names,
    fold_name,
    normalize_name,
    normalize_position,
    normalize_team,
)


class TestNormalizeName:
    """Tests for normalize_name()."""

    def test_lowercase_and_spaces_removed(self):
        assert normalize_name("Patrick Mahomes") == "patrickmahomes"
        assert normalize_name("  Josh   ALLEN ") == "joshallen"

    def test_roman_numeral_suffixes(self):
        """Test II-V suffixes are stripped."""
        assert normalize_name("Patrick Mahomes II") == "patrickmahomes"
        assert normalize_name("Kenneth Walker III") == "kennethwalker"
        assert normalize_name("Robert Griffin IV") == "robertgriffin"

    def test_junior_senior_suffixes(self):
        assert normalize_name("Odell Beckham Jr.") == "odellbeckham"
        assert normalize_name("Marvin Harrison Jr") == "marvinharrison"
        assert normalize_name("Kirk Cousins Sr.") == "kirkcousins"
        assert normalize_name("Ken Griffey Junior") == "kengriffey"

    def test_only_one_suffix_stripped(self):
        """Test suffix removal is applied once, longest token first."""
        assert normalize_name("John Smith Jr. III") == "johnsmithjr"

    def test_suffix_needs_word_boundary(self):
        """Test names that merely end in suffix letters are untouched."""
        assert normalize_name("Travis Etienne") == "travisetienne"
        assert normalize_name("Chris Olave") == "chrisolave"

    def test_punctuation_removed(self):
        assert normalize_name("D.J. Moore") == "djmoore"
        assert normalize_name("Amon-Ra St. Brown") == "amonrastbrown"
        assert normalize_name("Ja'Marr Chase") == "jamarrchase"

    def test_accents_folded(self):
        assert normalize_name("José Ramírez") == "joseramirez"

    def test_empty_input(self):
        assert normalize_name("") == ""
        assert normalize_name("   ") == ""
        assert normalize_name(None) == ""

    def test_idempotent(self):
        once = normalize_name("Odell Beckham Jr.")
        assert normalize_name(once) == once


class TestFoldName:
    """Tests for the spaced variant used for similarity scoring."""

    def test_keeps_word_boundaries(self):
        assert fold_name("Kenneth Walker III") == "kenneth walker"
        assert fold_name("  Amon-Ra   St. Brown ") == "amonra st brown"

    def test_empty(self):
        assert fold_name(None) == ""


class TestNormalizeTeam:
    """Tests for normalize_team()."""

    def test_basic(self):
        assert normalize_team("KC") == "kc"
        assert normalize_team(" n.o. ") == "no"

    def test_variants_kept_by_default(self):
        assert normalize_team("JAC") == "jac"
        assert normalize_team("JAX") == "jax"

    def test_variants_folded_on_request(self):
        assert normalize_team("JAC", canonicalize=True) == "jax"
        assert normalize_team("WSH", canonicalize=True) == "was"
        assert normalize_team("OAK", canonicalize=True) == "lv"

    def test_unknown_code_passes_through(self):
        assert normalize_team("XYZ") == "xyz"

    def test_empty(self):
        assert normalize_team("") == ""
        assert normalize_team(None) == ""


class TestNormalizePosition:
    """Tests for normalize_position()."""

    def test_defense_codes_collapse(self):
        assert normalize_position("DST") == "def"
        assert normalize_position("D/ST") == "def"
        assert normalize_position("DEF") == "def"

    def test_other_positions(self):
        assert normalize_position("QB") == "qb"
        assert normalize_position("wr") == "wr"

    def test_empty(self):
        assert normalize_position(None) == ""


class TestCanonicalCodes:
    """Tests for the import-time team and position filters."""

    def test_canonical_team(self):
        assert canonical_team("wsh") == "WAS"
        assert canonical_team(" JAC ") == "JAX"
        assert canonical_team("KC") == "KC"

    def test_free_agents_rejected(self):
        assert canonical_team("FA") is None
        assert canonical_team("") is None
        assert canonical_team(None) is None

    def test_canonical_position(self):
        assert canonical_position("D/ST") == "DEF"
        assert canonical_position("dst") == "DEF"
        assert canonical_position("PK") == "K"
        assert canonical_position("HB") == "RB"

    def test_non_fantasy_positions_rejected(self):
        assert canonical_position("OL") is None
        assert canonical_position("LB") is None
        assert canonical_position(None) is None


class TestCompareNames:
    """Tests for name similarity scoring."""

    def test_identical_after_folding(self):
        assert compare_names("Kenneth Walker III", "Kenneth Walker") == 1.0

    def test_nickname_scores_high(self):
        assert compare_names("Gabe Davis", "Gabriel Davis") > 0.8

    def test_different_players_score_low(self):
        assert compare_names("Patrick Mahomes", "Travis Kelce") < 0.8

    def test_empty_names(self):
        assert compare_names("", "Josh Allen") == 0.0
        assert compare_names("Josh Allen", "") == 0.0
