"""
Logging setup.

Configures loguru sinks for applications embedding the engine.
"""

import sys
from pathlib import Path

from loguru import logger

from network_tree.config import get_settings


def setup_logging(level: str | None = None, log_file: Path | str | None = None) -> None:
    """Configure stderr sink and optional rotating file sink."""
    config = get_settings()
    level = (level or config.log_level).upper()
    log_file = log_file if log_file is not None else config.log_file

    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file:
        logger.add(
            str(log_file),
            rotation="1 day",
            retention="7 days",
            level=level,
            encoding="utf-8",
        )

    logger.info("Network tree logging configured", extra={"level": level})
