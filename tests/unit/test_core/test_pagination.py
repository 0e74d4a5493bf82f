"""Unit tests for cursor-based pagination."""
from __future__ import annotations

import base64
import json
from datetime import UTC, datetime
from uuid import UUID

import pytest
from pydantic import ValidationError

from query_service.core.exceptions import InvalidInputException
from query_service.core.pagination.cursor import CursorCodec, CursorData, get_path
from query_service.core.pagination.schemas import (
    Connection,
    PageInfo,
    PageResult,
    PageWindow,
)


def _encode_payload(payload: object) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()


# ──────────────────────────────────────────────────────────────
# Test CursorData and CursorCodec
# ──────────────────────────────────────────────────────────────


class TestCursorData:
    """Tests for CursorData model."""

    def test_cursor_data_creation(self):
        """CursorData should store sort values and identifier."""
        cursor = CursorData(sort_field_values=["Anderson", None], identifier="abc")

        assert cursor.sort_field_values == ["Anderson", None]
        assert cursor.identifier == "abc"

    def test_identifier_is_required(self):
        """An empty identifier is rejected."""
        with pytest.raises(ValidationError):
            CursorData(sort_field_values=[], identifier="")

    def test_uuids_are_stringified(self):
        """UUID values travel as strings."""
        value = UUID("12345678-1234-5678-1234-567812345678")
        cursor = CursorData(sort_field_values=[value], identifier=value)

        assert cursor.sort_field_values == [str(value)]
        assert cursor.identifier == str(value)


class TestCursorCodec:
    """Tests for CursorCodec encode/decode."""

    def test_encode_uses_short_keys(self):
        """Encoded cursors are URL-safe base64 of {"v": [...], "i": ...}."""
        encoded = CursorCodec.encode(CursorData(sort_field_values=["Brown"], identifier="id-1"))

        decoded = json.loads(base64.urlsafe_b64decode(encoded.encode()).decode())
        assert decoded == {"v": ["Brown"], "i": "id-1"}

    def test_round_trip_preserves_values(self):
        """decode(encode(c)) == c, including nulls, numbers and datetimes."""
        created = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)
        original = CursorData(
            sort_field_values=["Anderson", None, 42, True, created],
            identifier="0b6c1d7e-0000-4000-8000-000000000001",
        )

        decoded = CursorCodec.decode(CursorCodec.encode(original))

        assert decoded == original
        assert isinstance(decoded.sort_field_values[4], datetime)

    def test_round_trip_without_sort_values(self):
        """Identifier-only cursors decode with an empty value list."""
        original = CursorData(sort_field_values=[], identifier="id-9")

        assert CursorCodec.decode(CursorCodec.encode(original)) == original

    def test_decode_garbage_fails(self):
        """Non-base64 input is an invalid-input error."""
        with pytest.raises(InvalidInputException, match="invalid cursor"):
            CursorCodec.decode("not-a-valid-cursor")

    def test_decode_empty_fails(self):
        with pytest.raises(InvalidInputException, match="cursor is empty"):
            CursorCodec.decode("")

    def test_decode_non_json_fails(self):
        cursor = base64.urlsafe_b64encode(b"\xff\xfe not json").decode()

        with pytest.raises(InvalidInputException, match="failed to decode"):
            CursorCodec.decode(cursor)

    def test_decode_rejects_non_object_payload(self):
        with pytest.raises(InvalidInputException, match="malformed payload"):
            CursorCodec.decode(_encode_payload(["a", "b"]))

    def test_decode_requires_identifier(self):
        with pytest.raises(InvalidInputException, match="missing identifier"):
            CursorCodec.decode(_encode_payload({"v": ["a"]}))

        with pytest.raises(InvalidInputException, match="missing identifier"):
            CursorCodec.decode(_encode_payload({"v": ["a"], "i": ""}))

    def test_decode_rejects_malformed_values(self):
        with pytest.raises(InvalidInputException, match="malformed sort values"):
            CursorCodec.decode(_encode_payload({"v": "a", "i": "x"}))

        with pytest.raises(InvalidInputException, match="malformed sort values"):
            CursorCodec.decode(_encode_payload({"v": [{"$where": "1"}], "i": "x"}))

    def test_decode_errors_carry_invalid_input_code(self):
        with pytest.raises(InvalidInputException) as exc_info:
            CursorCodec.decode("%%%")

        assert exc_info.value.code == "INVALID_INPUT"
        assert exc_info.value.status_code == 400

    def test_create_cursor_reads_dotted_paths(self):
        """Cursors carry active sort values in order, identifier separately."""
        doc = {
            "identifier": "id-7",
            "lastName": "Brown",
            "payment": {"status": "PAID"},
        }

        cursor = CursorCodec.create_cursor(doc, ["lastName", "payment.status", "identifier"])
        data = CursorCodec.decode(cursor)

        assert data.sort_field_values == ["Brown", "PAID"]
        assert data.identifier == "id-7"

    def test_create_cursor_missing_field_is_null(self):
        cursor = CursorCodec.create_cursor({"identifier": "id-1"}, ["birthDate"])

        assert CursorCodec.decode(cursor).sort_field_values == [None]


class TestGetPath:
    def test_nested_lookup(self):
        assert get_path({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_missing_segments_are_none(self):
        assert get_path({"a": {"b": 1}}, "a.x") is None
        assert get_path({"a": 1}, "a.b") is None


# ──────────────────────────────────────────────────────────────
# Test request/response schemas
# ──────────────────────────────────────────────────────────────


class TestPageWindow:
    """Tests for PageWindow direction and limits."""

    def test_defaults_forward(self):
        window = PageWindow()

        assert window.is_forward
        assert window.cursor is None
        assert window.limit(200) == 200

    def test_forward_window(self):
        window = PageWindow(first=20, after="abc")

        assert window.is_forward
        assert window.cursor == "abc"
        assert window.limit(200) == 20

    def test_backward_window(self):
        window = PageWindow(last=5, before="xyz")

        assert window.is_backward
        assert window.cursor == "xyz"
        assert window.limit(200) == 5

    def test_before_alone_pages_backward(self):
        window = PageWindow(before="xyz")

        assert window.is_backward
        assert window.limit(50) == 50

    def test_empty_cursors_are_absent(self):
        window = PageWindow(first=10, after="", before="")

        assert window.after is None
        assert window.before is None


class TestPageResult:
    """Tests for PageResult and its Relay projection."""

    def test_empty_page(self):
        page = PageResult[str]()

        assert page.items == []
        assert page.total_count == 0
        assert page.start_cursor is None
        assert page.end_cursor is None

    def test_page_info(self):
        page = PageResult[str](
            items=["a", "b"],
            total_count=10,
            has_next_page=True,
            start_cursor="c1",
            end_cursor="c2",
            cursors=["c1", "c2"],
        )

        info = page.page_info

        assert isinstance(info, PageInfo)
        assert info.has_next_page is True
        assert info.has_previous_page is False
        assert info.start_cursor == "c1"
        assert info.end_cursor == "c2"
        assert info.total_count == 10

    def test_to_connection(self):
        page = PageResult[str](
            items=["a", "b"],
            total_count=2,
            start_cursor="c1",
            end_cursor="c2",
            cursors=["c1", "c2"],
        )

        connection = page.to_connection()

        assert isinstance(connection, Connection)
        assert connection.nodes == ["a", "b"]
        assert [edge.cursor for edge in connection.edges] == ["c1", "c2"]
        assert connection.page_info.total_count == 2

    def test_cursors_are_not_serialized(self):
        page = PageResult[str](items=["a"], total_count=1, cursors=["c1"])

        assert "cursors" not in page.model_dump()
