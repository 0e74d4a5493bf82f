"""Pagination request and response schemas.

Request side:
    PageWindow: the Relay window ``first/after`` (forward) or
    ``last/before`` (backward).

Response side:
    PageResult: items plus total count, navigation flags and boundary
    cursors, as produced by the search engine.
    Connection/Edge/PageInfo: the Relay Connection shape, derived from a
    PageResult with ``to_connection()``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")


class PageWindow(BaseModel):
    """Requested page window.

    Forward: ``first`` items after the ``after`` cursor.
    Backward: ``last`` items before the ``before`` cursor.

    Empty cursor strings are treated as absent. Combination and range
    rules are enforced by ``validate_page_window``.
    """

    first: int | None = Field(default=None, description="Forward page size")
    after: str | None = Field(default=None, description="Cursor to page forward from")
    last: int | None = Field(default=None, description="Backward page size")
    before: str | None = Field(default=None, description="Cursor to page backward from")

    model_config = {"frozen": True}

    @field_validator("after", "before", mode="before")
    @classmethod
    def empty_cursor_is_absent(cls, v: Any) -> Any:
        if v == "":
            return None
        return v

    @property
    def is_backward(self) -> bool:
        """Backward when ``last`` is set, or only ``before`` is given."""
        return self.last is not None or (self.first is None and self.before is not None)

    @property
    def is_forward(self) -> bool:
        return not self.is_backward

    @property
    def cursor(self) -> str | None:
        """Position cursor for the active direction."""
        return self.before if self.is_backward else self.after

    def limit(self, default: int) -> int:
        """Effective page size: ``first``, ``last`` or ``default``."""
        size = self.last if self.is_backward else self.first
        return default if size is None else size


class PageInfo(BaseModel):
    """Pagination metadata following GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
        total_count: Total number of matching items
    """

    has_previous_page: bool = Field(description="Whether previous items exist")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")
    total_count: int | None = Field(default=None, description="Total count")


class Edge(BaseModel, Generic[T]):
    """Edge wrapper for paginated items (Relay pattern).

    Attributes:
        node: The actual data item
        cursor: Cursor for this specific item
    """

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(BaseModel, Generic[T]):
    """GraphQL Connection pattern for cursor pagination.

    Client navigation:
        # First page
        search("customer", first=10)

        # Next page (using end_cursor from previous response)
        search("customer", first=10, after=page_info.end_cursor)

        # Previous page (using start_cursor)
        search("customer", last=10, before=page_info.start_cursor)

    Attributes:
        edges: List of Edge objects containing nodes and cursors
        page_info: Navigation metadata
    """

    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(description="Pagination metadata")

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


class PageResult(BaseModel, Generic[T]):
    """One page of search results.

    ``total_count`` counts every matching, non-deleted record regardless
    of the window. ``start_cursor``/``end_cursor`` belong to the first and
    last item and are None for an empty page.

    Attributes:
        items: Records in sort order
        total_count: Size of the full filtered population
        has_next_page: Whether records exist after this page
        has_previous_page: Whether records exist before this page
        start_cursor: Cursor of the first item
        end_cursor: Cursor of the last item
        cursors: Per-item cursors, aligned with ``items``
    """

    items: list[T] = Field(default_factory=list, description="Records in sort order")
    total_count: int = Field(default=0, ge=0, description="Total matching records")
    has_next_page: bool = Field(default=False, description="Whether more items exist")
    has_previous_page: bool = Field(default=False, description="Whether previous items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")
    cursors: list[str] = Field(
        default_factory=list,
        exclude=True,
        description="Per-item cursors aligned with items",
    )

    @property
    def page_info(self) -> PageInfo:
        return PageInfo(
            has_previous_page=self.has_previous_page,
            has_next_page=self.has_next_page,
            start_cursor=self.start_cursor,
            end_cursor=self.end_cursor,
            total_count=self.total_count,
        )

    def to_connection(self) -> Connection[T]:
        """Convert to the Relay Connection shape."""
        return Connection[T](
            edges=[
                Edge[T](node=item, cursor=cursor)
                for item, cursor in zip(self.items, self.cursors, strict=True)
            ],
            page_info=self.page_info,
        )


__all__ = [
    "Connection",
    "Edge",
    "PageInfo",
    "PageResult",
    "PageWindow",
]
