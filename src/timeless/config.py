"""Configuration management for Timeless application.

This module provides centralized configuration management using environment variables
and Streamlit secrets as fallback. Designed for simplicity and personal app usage.
"""

import os
from datetime import date
from typing import Any

import streamlit as st

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMELINE_START = "2024-09-01"
DEFAULT_TIMELINE_END = "2025-12-31"


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        """Initialize configuration."""
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        # Fallback to Streamlit secrets
        if value is None:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets.toml or not running inside Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")  # type: ignore[assignment]
                    else:
                        value = bool(value)  # type: ignore[assignment]
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to cast config value '{key}' to {cast_type.__name__}: {e}")
                value = default

        self._cache[cache_key] = value
        return value

    def get_required(self, key: str, cast_type: type = str) -> Any:
        """Get required configuration value.

        Args:
            key: Configuration key
            cast_type: Type to cast the value to

        Returns:
            Configuration value

        Raises:
            ValueError: If the required configuration is not found
        """
        value = self.get(key, cast_type=cast_type)
        if value is None or value == "":
            raise ValueError(f"Required configuration '{key}' not found")
        return value

    def get_date(self, key: str, default: str | None = None) -> date | None:
        """Get a ``YYYY-MM-DD`` configuration value as a date.

        An empty value yields None so callers can fall back to derived bounds.

        Raises:
            ValueError: If the value is set but is not a valid date
        """
        value = self.get(key, default)
        if not value:
            return None
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError as e:
            raise ValueError(f"Configuration '{key}' must be a YYYY-MM-DD date, got {value!r}") from e

    def is_development(self) -> bool:
        """Check if running in development mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["development", "dev", "local"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get configuration value with type casting."""
    return get_config().get(key, default, cast_type)


def get_debug_mode() -> bool:
    """Get debug mode setting."""
    return bool(get_env("DEBUG", False, bool)) or get_config().is_development()


def get_timeline_bounds() -> tuple[date | None, date | None]:
    """Get the configured timeline start and end dates.

    Returns:
        tuple: (start, end); either may be None when configured empty
    """
    config = get_config()
    return (
        config.get_date("TIMELINE_START_DATE", DEFAULT_TIMELINE_START),
        config.get_date("TIMELINE_END_DATE", DEFAULT_TIMELINE_END),
    )


def get_swipe_threshold() -> int:
    """Get the carousel swipe distance threshold."""
    return int(get_env("SWIPE_THRESHOLD", 50, int))
