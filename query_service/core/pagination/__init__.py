"""Cursor-based (keyset) pagination.

This package provides Relay-style cursor pagination that is:
- Stable: cursors bind the exact sort values of a boundary record
- Cheap: the next page is found with a seek predicate, not an offset scan
- Bidirectional: ``first/after`` pages forward, ``last/before`` backward

The cursor encodes the sort field values and identifier of a boundary
record. Cursors are opaque base64 strings that clients pass back unchanged.
"""

from query_service.core.pagination.cursor import CursorCodec, CursorData
from query_service.core.pagination.filters import PositionFilter
from query_service.core.pagination.schemas import (
    Connection,
    Edge,
    PageInfo,
    PageResult,
    PageWindow,
)

__all__ = [
    "Connection",
    "CursorCodec",
    "CursorData",
    "Edge",
    "PageInfo",
    "PageResult",
    "PageWindow",
    "PositionFilter",
]
