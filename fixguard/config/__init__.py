"""Configuration module for fixguard."""

from fixguard.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
