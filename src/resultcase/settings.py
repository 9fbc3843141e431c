"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultcase.settings import get_settings
    >>> settings = get_settings()
    >>> settings.log_level
    'INFO'

    # Or with environment variables:
    # RESULTCASE_LOG_LEVEL=DEBUG
    # RESULTCASE_LOG_TRACEBACKS=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResultcaseSettings(BaseSettings):
    """Root settings, loaded from RESULTCASE_* variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json", "none"] = "console"
    log_captured: bool = Field(default=True, description="Log exceptions captured by try_catch/from_awaitable")
    log_tracebacks: bool = Field(default=False, description="Attach formatted tracebacks to capture logs")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> ResultcaseSettings:
    """Get the global settings instance (cached)."""
    return ResultcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()


def resolve_settings() -> ResultcaseSettings:
    """Like get_settings(), but falls back to defaults on an invalid environment.

    Used on the capture and logging paths, which must not fail because of
    configuration.
    """
    try:
        return get_settings()
    except ValidationError:
        return ResultcaseSettings.model_construct()
