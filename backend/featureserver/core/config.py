"""Application settings and configuration management.

This module provides Pydantic-based settings management that loads
configuration from environment variables or a .env file. Settings include
the default spatial reference attached to computed extents, the service
version and record limits advertised in layer descriptors, CORS origins,
and the log level.

Example:
    Settings can be accessed via the cached get_settings() function:
        >>> from featureserver.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.default_wkid)

    Environment variables can override defaults:
        >>> DEFAULT_WKID=3857
        >>> MAX_RECORD_COUNT=5000
        >>> LOG_LEVEL=DEBUG
"""

import functools
from typing import Literal

import pydantic_settings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration pulled from environment variables or defaults.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        default_wkid: Well-known ID used when neither the options nor the
            GeoJSON document name a coordinate system (WGS84 by default).
        current_version: GeoServices version advertised in descriptors.
        max_record_count: Default page size advertised in descriptors.
        allow_origins: List of allowed CORS origins (["*"] allows all).
        log_level: Root log level applied when the app is created.

    Example:
        Create settings with custom values:
            >>> settings = Settings(
            ...     default_wkid=3857,
            ...     max_record_count=5000,
            ... )

        Or use environment variables:
            >>> export DEFAULT_WKID=3857
            >>> settings = Settings()  # Loads from environment
    """

    default_wkid: int = 4326
    current_version: float = 11.2
    max_record_count: int = 2000
    allow_origins: list[str] = ["*"]
    log_level: LogLevel = "INFO"

    model_config = pydantic_settings.SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@functools.lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables or .env file and cached
    for the lifetime of the application. Subsequent calls return the same
    cached instance.

    Returns:
        Settings instance with all configuration values populated.

    Example:
        The settings are cached, so multiple calls return the same instance:
            >>> settings1 = get_settings()
            >>> settings2 = get_settings()
            >>> assert settings1 is settings2  # Same instance
    """
    return Settings()
