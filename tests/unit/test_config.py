"""
Unit tests for settings validation.
"""

import pytest
from pydantic import ValidationError

from rosterlink.config import Settings


class TestSettings:
    """Tests for Settings validators."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.provider_a_name == "espn"
        assert settings.provider_b_name == "fantasypros"
        assert settings.crosswalk_canonicalize_teams is False

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    @pytest.mark.parametrize("field", ["crosswalk_min_match_rate", "crosswalk_suggestion_threshold"])
    def test_fractions_bounded(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 1.5})
