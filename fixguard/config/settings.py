"""
Environment and configuration settings for fixguard.

Uses pydantic-settings for environment variable management with validation.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FIXGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Conflict resolution
    default_strategy: str = Field(
        default="skip-lower-priority",
        description="Conflict policy (skip-lower-priority/skip-all-conflicts/merge-when-possible)",
    )
    treat_adjacent_as_conflict: bool = Field(
        default=False,
        description="Count operations on touching line ranges as conflicting",
    )
    priority_config_path: Optional[str] = Field(
        default=None,
        description="YAML/JSON file overriding the priority score tables",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # CLI
    default_output_format: Literal["human", "json"] = Field(
        default="human",
        description="Default output format (human/json)",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def configure_logging(settings: Settings, verbose: bool = False):
    """
    Configure root logging from settings.

    Args:
        settings: Application settings
        verbose: Force DEBUG level
    """
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=settings.log_format)
