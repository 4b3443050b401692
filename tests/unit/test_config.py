"""
Unit tests for engine settings.

Tests cover:
- Defaults
- Environment overrides
- Validation of out-of-range values
"""

import pytest
from pydantic import ValidationError

from network_tree import TreeSettings, get_settings


class TestTreeSettings:
    """Tests for TreeSettings."""

    def test_defaults(self) -> None:
        """Test default layout units and fetch depth."""
        config = TreeSettings(_env_file=None)
        assert config.unit_width == 280.0
        assert config.level_spacing == 200.0
        assert config.default_fetch_depth == 5
        assert config.search_mode == "text"
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_env_override(self, monkeypatch) -> None:
        """Test NETWORK_TREE_* variables override defaults."""
        monkeypatch.setenv("NETWORK_TREE_UNIT_WIDTH", "100")
        monkeypatch.setenv("NETWORK_TREE_SEARCH_MODE", " Code ")
        monkeypatch.setenv("NETWORK_TREE_LOG_LEVEL", "debug")
        config = TreeSettings(_env_file=None)
        assert config.unit_width == 100.0
        assert config.search_mode == "code"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("unit_width", 0),
            ("level_spacing", -5),
            ("default_fetch_depth", 0),
            ("default_fetch_depth", 51),
            ("search_mode", "fuzzy"),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_values(self, field, value) -> None:
        """Test out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            TreeSettings(_env_file=None, **{field: value})

    def test_get_settings_is_shared(self) -> None:
        """Test get_settings returns the module instance."""
        assert get_settings() is get_settings()
