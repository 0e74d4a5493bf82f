"""Test fixtures for pytest.

This module re-exports the in-memory store and record factories.
"""

from .memory_store import MemoryDocumentStore
from .records import (
    make_customer,
    make_employee,
    make_execution_plan,
    make_inventory,
    make_team,
    uuid_for,
)

__all__ = [
    "MemoryDocumentStore",
    "make_customer",
    "make_employee",
    "make_execution_plan",
    "make_inventory",
    "make_team",
    "uuid_for",
]
