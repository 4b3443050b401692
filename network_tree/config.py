"""
Engine settings.

Loads configuration from environment variables using pydantic-settings.
Every value can be overridden by explicit arguments at call sites.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from network_tree.constants import (
    DEFAULT_FETCH_DEPTH,
    DEFAULT_LEVEL_SPACING,
    DEFAULT_UNIT_WIDTH,
    MAX_FETCH_DEPTH,
)


class TreeSettings(BaseSettings):
    """Network tree settings loaded from NETWORK_TREE_* variables."""

    # Layout
    unit_width: float = Field(
        default=DEFAULT_UNIT_WIDTH,
        gt=0,
        description="Horizontal width of one layout unit",
    )
    level_spacing: float = Field(
        default=DEFAULT_LEVEL_SPACING,
        gt=0,
        description="Vertical distance between depth levels",
    )

    # Fetch boundary
    default_fetch_depth: int = Field(
        default=DEFAULT_FETCH_DEPTH,
        ge=1,
        le=MAX_FETCH_DEPTH,
        description="Depth requested from the hierarchy source",
    )

    # Search
    search_mode: str = Field(
        default="text",
        description="Default match mode for free-text search",
    )

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="NETWORK_TREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("search_mode")
    @classmethod
    def validate_search_mode(cls, v: str) -> str:
        """Ensure search mode is one of the supported predicates."""
        normalized = v.strip().lower()
        if normalized not in ("text", "code", "any"):
            raise ValueError(
                f"search_mode must be one of text, code, any (got {v!r})"
            )
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.strip().upper()
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unknown log level: {v}")
        return level


settings = TreeSettings()


def get_settings() -> TreeSettings:
    """Return the process-wide settings instance."""
    return settings
