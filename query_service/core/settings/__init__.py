"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (pagination, document store, logging),
read from environment variables, frozen after validation and cached
by the loaders.

Import settings via cached loaders:
    from query_service.core.settings import get_pagination_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .database import DocumentStoreSettings
from .loader import (
    clear_settings_cache,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "DocumentStoreSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_settings_cache",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
