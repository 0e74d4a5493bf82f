"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode the position of one boundary record
in a sorted result set. They carry the record's values for every active sort
field plus its identifier, which is always the final tiebreaker.

The cursor format is:
1. JSON object with the ordered sort values and the identifier
2. Base64 URL-safe encoded for use in URLs

Example cursor payload:
    {"v":["Anderson",{"$date":"2025-01-15T10:30:00+00:00"}],"i":"0b6c...-..."}

Datetimes are tagged so they decode back to ``datetime`` and keep comparing
correctly against stored dates. Decoding fails closed: anything that is not a
well-formed payload with an identifier is rejected with InvalidInputException.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from query_service.core.exceptions import InvalidInputException

_DATE_TAG = "$date"


class CursorData(BaseModel):
    """Internal representation of cursor data.

    Attributes:
        sort_field_values: Values of the active sort fields, in sort order
        identifier: Unique identifier of the boundary record
    """

    sort_field_values: list[Any] = Field(
        default_factory=list,
        description="Sort field values for seeking",
    )
    identifier: str = Field(
        min_length=1,
        description="Identifier of the boundary record (tiebreaker)",
    )

    model_config = {"frozen": True}

    @field_validator("sort_field_values", mode="before")
    @classmethod
    def stringify_uuids(cls, v: Any) -> Any:
        """UUIDs travel as strings, so store them that way from the start."""
        if isinstance(v, list | tuple):
            return [str(item) if isinstance(item, UUID) else item for item in v]
        return v

    @field_validator("identifier", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Any:
        if isinstance(v, UUID):
            return str(v)
        return v


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        # Encoding
        cursor = CursorCodec.encode(CursorData(
            sort_field_values=["Anderson"], identifier="0b6c...",
        ))

        # Decoding
        data = CursorCodec.decode(cursor)
        print(data.sort_field_values)  # ["Anderson"]
    """

    @staticmethod
    def encode(data: CursorData) -> str:
        """Encode cursor data to an opaque string.

        Args:
            data: Cursor data with sort field values and identifier

        Returns:
            URL-safe base64 encoded string
        """
        serialized = {
            "v": [CursorCodec._serialize_value(value) for value in data.sort_field_values],
            "i": data.identifier,
        }
        json_str = json.dumps(serialized, separators=(",", ":"), default=str)
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> CursorData:
        """Decode a cursor string to cursor data.

        Args:
            cursor: URL-safe base64 encoded cursor string

        Returns:
            CursorData with sort field values and identifier

        Raises:
            InvalidInputException: If the cursor is empty, not valid base64,
                not a JSON object of the expected shape, or has no identifier.
        """
        if not cursor:
            raise InvalidInputException(detail="invalid cursor: cursor is empty")

        try:
            raw = base64.b64decode(cursor.encode(), altchars=b"-_", validate=True)
            payload = json.loads(raw.decode())
        except ValueError as exc:
            raise InvalidInputException(
                detail="invalid cursor: failed to decode", cause=exc
            ) from exc

        if not isinstance(payload, dict):
            raise InvalidInputException(detail="invalid cursor: malformed payload")

        identifier = payload.get("i")
        if not isinstance(identifier, str) or not identifier:
            raise InvalidInputException(detail="invalid cursor: missing identifier")

        values = payload.get("v", [])
        if not isinstance(values, list):
            raise InvalidInputException(detail="invalid cursor: malformed sort values")

        try:
            return CursorData(
                sort_field_values=[CursorCodec._deserialize_value(v) for v in values],
                identifier=identifier,
            )
        except ValueError as exc:
            raise InvalidInputException(
                detail="invalid cursor: malformed sort values", cause=exc
            ) from exc

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Serialize a value to JSON-compatible format.

        Handles special types like datetime and UUID.
        """
        if isinstance(value, datetime):
            return {_DATE_TAG: value.isoformat()}
        if isinstance(value, UUID):
            return str(value)
        return value

    @staticmethod
    def _deserialize_value(value: Any) -> Any:
        if isinstance(value, dict):
            if set(value) == {_DATE_TAG} and isinstance(value[_DATE_TAG], str):
                return datetime.fromisoformat(value[_DATE_TAG])
            raise ValueError("unsupported cursor value")
        return value

    @staticmethod
    def create_cursor(
        record: Mapping[str, Any],
        sort_fields: list[str],
        identifier_field: str = "identifier",
    ) -> str:
        """Create a cursor from a stored document.

        Args:
            record: Raw document as returned by the store
            sort_fields: Active sort field paths (dotted paths allowed)
            identifier_field: Field holding the record's unique identifier

        Returns:
            Encoded cursor string

        Example:
            cursor = CursorCodec.create_cursor(
                doc,
                sort_fields=["lastName", "payment.status"],
            )
        """
        values = [
            get_path(record, field)
            for field in sort_fields
            if field != identifier_field
        ]
        identifier = get_path(record, identifier_field)
        return CursorCodec.encode(
            CursorData(sort_field_values=values, identifier=str(identifier or ""))
        )


def get_path(record: Mapping[str, Any], path: str) -> Any:
    """Read a dotted path from a nested document, ``None`` when absent."""
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


__all__ = ["CursorCodec", "CursorData", "get_path"]
