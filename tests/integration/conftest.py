"""Shared data for scenario tests against the in-memory store."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from tests.fixtures import MemoryDocumentStore, make_customer


@pytest.fixture
def seeded_customers(store: MemoryDocumentStore) -> MemoryDocumentStore:
    """Three live customers (Zimmerman, Anderson, Brown) and one deleted."""
    store.insert(
        "customers",
        make_customer(1, lastName="Zimmerman", firstName="Zoe", isShared=True),
        make_customer(2, lastName="Anderson", firstName="Ann"),
        make_customer(3, lastName="Brown", firstName="Bob", isShared=True),
        make_customer(4, lastName="Adams", deleted=True),
    )
    return store


@pytest.fixture
def birthdays(store: MemoryDocumentStore) -> MemoryDocumentStore:
    """Customers with and without birth dates (null and missing)."""
    store.insert(
        "customers",
        make_customer(1, birthDate=datetime(1980, 1, 1, tzinfo=UTC)),
        make_customer(2, birthDate=None),
        make_customer(3, birthDate=datetime(1990, 1, 1, tzinfo=UTC)),
        make_customer(4),
    )
    return store
