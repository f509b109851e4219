"""Fingerprinting configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_fingerprint.sql_toolkit import Dialect

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Library settings loaded from environment variables with SQL_FINGERPRINT_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="SQL_FINGERPRINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Used whenever a caller passes dialect=None.
    default_dialect: Dialect = Dialect.GENERIC
    debug: bool = False

    @field_validator("default_dialect", mode="before")
    @classmethod
    def lowercase_dialect(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings with default dialect: %s", settings.default_dialect.value)

    return settings


_settings_cache: Settings | None = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings` singleton."""
    global _settings_cache  # noqa: PLW0603
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them.  For testing only."""
    global _settings_cache  # noqa: PLW0603
    _settings_cache = None
