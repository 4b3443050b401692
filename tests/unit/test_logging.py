"""
Unit tests for logging setup.
"""

from loguru import logger

from network_tree import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_sink_receives_records(self, tmp_path) -> None:
        """Test records reach the configured log file."""
        log_file = tmp_path / "tree.log"
        setup_logging(level="debug", log_file=log_file)
        try:
            logger.debug("layout computed")
        finally:
            logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "Network tree logging configured" in content
        assert "layout computed" in content

    def test_level_filters_records(self, tmp_path) -> None:
        """Test records below the level are dropped."""
        log_file = tmp_path / "tree.log"
        setup_logging(level="WARNING", log_file=log_file)
        try:
            logger.info("hidden")
            logger.warning("shown")
        finally:
            logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "hidden" not in content
        assert "shown" in content
