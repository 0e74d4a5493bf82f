"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from query_service.core.settings.loader import get_pagination_settings

    settings = get_pagination_settings()  # First call: loads and validates
    settings = get_pagination_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_pagination_settings.cache_clear()

    Or override with custom values:
    settings = PaginationSettings(max_page_size=50)
"""

from __future__ import annotations

from functools import lru_cache

from .database import DocumentStoreSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DocumentStoreSettings:
    """Get cached document store settings.

    Returns:
        Validated and frozen DocumentStoreSettings instance.
    """
    return DocumentStoreSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Clear every cached settings instance (tests, reloads)."""
    get_pagination_settings.cache_clear()
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
