"""Library configuration using Pydantic Settings.

Environment variables (prefixed with ``GRAPHLAYERS_``) are loaded from .env
files and the system environment.
"""

import logging
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Library settings.

    All settings can be overridden via environment variables, e.g.
    ``GRAPHLAYERS_LOG_LEVEL=DEBUG``. Environment variables take precedence
    over .env file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHLAYERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "graphlayers"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: str | None = None  # No file handler when unset
    LOG_JSON_FORMAT: bool = False  # Use JSON format for console and file logs

    # Layering
    DEFAULT_MAX_LAYER_SIZE: int = 4

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Accept log level names in any case, or their numeric values."""
        if isinstance(v, int):
            v = logging.getLevelName(v)
        level = str(v).strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("DEFAULT_MAX_LAYER_SIZE")
    @classmethod
    def validate_default_max_layer_size(cls, v: int) -> int:
        """A layer must be able to hold at least one element."""
        if v < 1:
            raise ValueError("DEFAULT_MAX_LAYER_SIZE must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached library settings.

    Settings are cached after first load.
    """
    return Settings()


# Global settings instance
settings = get_settings()
