"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolated settings caches
    - Store Fixtures: in-memory document store and query service
    - Logging Fixtures: log context isolation

When adding new entities:
    1. Add a factory to tests/fixtures/records.py
    2. Seed it through the ``store`` fixture in your test
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from query_service.core.settings import (
    DocumentStoreSettings,
    LoggingSettings,
    PaginationSettings,
    clear_settings_cache,
)
from query_service.features.service import QueryService
from query_service.infra.logging import clear_log_context
from tests.fixtures import MemoryDocumentStore

# Keep developer .env files and shell variables out of the tests
for _name in list(os.environ):
    if _name.startswith(("PAGINATION_", "MONGODB_", "LOG_")):
        del os.environ[_name]


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings() -> Iterator[None]:
    """Reset cached settings and log context around every test."""
    clear_settings_cache()
    clear_log_context()
    yield
    clear_settings_cache()
    clear_log_context()


@pytest.fixture
def pagination_settings() -> PaginationSettings:
    return PaginationSettings(max_batch_size=100, default_page_size=200, max_page_size=200)


@pytest.fixture
def db_settings() -> DocumentStoreSettings:
    return DocumentStoreSettings(query_timeout=None)


@pytest.fixture
def log_settings() -> LoggingSettings:
    return LoggingSettings(json_logs=False)


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Empty in-memory store; seed it with ``store.insert(collection, *docs)``."""
    return MemoryDocumentStore()


@pytest.fixture
def service(
    store: MemoryDocumentStore,
    pagination_settings: PaginationSettings,
    db_settings: DocumentStoreSettings,
    log_settings: LoggingSettings,
) -> QueryService:
    """QueryService over the in-memory store with the standard limits."""
    return QueryService(
        store,
        pagination=pagination_settings,
        db_settings=db_settings,
        log_settings=log_settings,
    )
