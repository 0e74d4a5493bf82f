"""Generic repository for document-store entities.

One repository class serves every entity; all entity-specific behaviour
comes from its ``EntityConfig``. Each public operation validates input
first, then awaits exactly one aggregation against the store.

Example:
    from query_service.core.database.repository import EntityRepository

    repo = EntityRepository[CustomerRecord](customer_config, store)

    page = await repo.search(
        filter_node=FieldFilter("lastName", FilterOperator.STARTS_WITH, "and"),
        sort_spec=[SortField("lastName")],
        window=PageWindow(first=20),
    )
    for item in page.items:
        ...
    if page.has_next_page:
        page = await repo.search(window=PageWindow(first=20, after=page.end_cursor))
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from pydantic import ValidationError

from query_service.core.database.filters import (
    FilterNode,
    build_base_predicate,
    deletion_predicate,
)
from query_service.core.database.sorting import SortPlan, SortSpec, plan_sort
from query_service.core.database.store import map_store_error
from query_service.core.exceptions import (
    AppException,
    DatabaseException,
    NotFoundException,
)
from query_service.core.pagination.cursor import CursorCodec
from query_service.core.pagination.filters import PositionFilter
from query_service.core.pagination.schemas import PageResult, PageWindow
from query_service.core.settings.loader import get_pagination_settings
from query_service.core.validators.common import (
    dedupe_identifiers,
    validate_identifier,
    validate_identifiers,
    validate_page_window,
)
from query_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from query_service.core.database.registry import EntityConfig
    from query_service.core.database.store import Document, DocumentStore, Pipeline
    from query_service.core.settings.pagination import PaginationSettings

TOTAL_COUNT_FIELD = "totalCount"

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """Search, batch and single-key reads for one entity.

    Provides:
        - search(filter_node, sort_spec, window) -> PageResult[T]
        - get_by_keys(identifiers, sort_spec) -> list[T]
        - get(identifier) -> T | None
        - get_or_raise(identifier) -> T (raises NotFoundException)

    Store failures, decode failures and deadline expiry surface as
    DatabaseException; malformed input surfaces as InvalidInputException
    before any query runs.
    """

    __slots__ = ("config", "store", "pagination", "_logger", "_lazy")

    def __init__(
        self,
        config: EntityConfig,
        store: DocumentStore,
        *,
        pagination: PaginationSettings | None = None,
    ) -> None:
        """Initialize repository for one entity.

        Args:
            config: Entity configuration (collection, soft delete, model)
            store: Document store executing aggregations
            pagination: Page size and batch limits (default: cached settings)
        """
        self.config = config
        self.store = store
        self.pagination = pagination or get_pagination_settings()
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{config.name}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{config.name}")

    # ──────────────────────────────────────────────────────────────
    # Paginated search
    # ──────────────────────────────────────────────────────────────

    async def search(
        self,
        filter_node: FilterNode | None = None,
        sort_spec: SortSpec | None = None,
        window: PageWindow | None = None,
        *,
        timeout: float | None = None,
    ) -> PageResult[T]:
        """Execute a filtered, sorted, cursor-paginated search.

        Count and page come from one aggregation: the count branch ignores
        the cursor and window, the data branch fetches one extra record to
        detect whether another page exists.

        Args:
            filter_node: Filter expression (None matches everything)
            sort_spec: Ordered sort fields (None sorts by identifier)
            window: Page window (default: first page of the default size)
            timeout: Deadline in seconds for the store call

        Returns:
            PageResult with items in natural sort order

        Raises:
            InvalidInputException: Invalid window or cursor
            DatabaseException: Store failure, decode failure or timeout
        """
        window = window or PageWindow()
        validate_page_window(window, self.pagination.max_page_size)
        limit = window.limit(self.pagination.default_page_size)
        backward = window.is_backward

        cursor = CursorCodec.decode(window.cursor) if window.cursor is not None else None
        plan = plan_sort(sort_spec, self.config.identifier_field)
        position = (
            PositionFilter(cursor, plan, backward=backward).build()
            if cursor is not None
            else None
        )

        pipeline = self.build_search_pipeline(
            filter_node, plan, limit=limit, position=position, backward=backward
        )
        self._lazy.debug(
            "search %s pipeline: %s",
            self.config.collection_name,
            lambda: json.dumps(pipeline, default=str),
        )

        documents = await self._aggregate(pipeline, timeout)
        facet = documents[0] if documents else {}
        metadata = facet.get("metadata") or []
        total_count = int(metadata[0].get(TOTAL_COUNT_FIELD, 0)) if metadata else 0
        raw: list[Document] = list(facet.get("data") or [])

        has_extra = len(raw) > limit
        raw = raw[:limit]
        if backward:
            raw.reverse()
            has_previous_page = has_extra
            has_next_page = cursor is not None
        else:
            has_next_page = has_extra
            has_previous_page = cursor is not None

        items = [self._decode(doc) for doc in raw]
        cursors = [self._cursor_for(doc, plan) for doc in raw]

        self._lazy.debug(
            "search %s returned %d of %d",
            self.config.collection_name,
            len(items),
            total_count,
        )
        return PageResult[T](
            items=items,
            total_count=total_count,
            has_next_page=has_next_page,
            has_previous_page=has_previous_page,
            start_cursor=cursors[0] if cursors else None,
            end_cursor=cursors[-1] if cursors else None,
            cursors=cursors,
        )

    def build_search_pipeline(
        self,
        filter_node: FilterNode | None,
        plan: SortPlan,
        *,
        limit: int,
        position: dict[str, Any] | None = None,
        backward: bool = False,
    ) -> Pipeline:
        """Build the single count+data aggregation for a search.

        Shape:
            [{$match: base}, {$facet: {metadata: [{$count}], data: [
                {$match: position}?, ...sort stages, {$limit: limit + 1}]}}]
        """
        data: Pipeline = []
        if position:
            data.append({"$match": position})
        data.extend(plan.stages(reverse=backward))
        data.append({"$limit": limit + 1})

        return [
            {"$match": build_base_predicate(self.config, filter_node)},
            {
                "$facet": {
                    "metadata": [{"$count": TOTAL_COUNT_FIELD}],
                    "data": data,
                }
            },
        ]

    # ──────────────────────────────────────────────────────────────
    # Key lookups
    # ──────────────────────────────────────────────────────────────

    async def get_by_keys(
        self,
        identifiers: Sequence[str],
        sort_spec: SortSpec | None = None,
        *,
        timeout: float | None = None,
    ) -> list[T]:
        """Fetch the records with the given identifiers.

        Identifiers are validated and deduplicated; identifiers without a
        matching (non-deleted) record are silently omitted. Result order
        follows ``sort_spec`` (identifier ascending by default).

        Raises:
            InvalidInputException: Batch too large or malformed identifier
            DatabaseException: Store failure, decode failure or timeout
        """
        ids = dedupe_identifiers(
            validate_identifiers(identifiers, self.pagination.max_batch_size)
        )
        if not ids:
            return []

        plan = plan_sort(sort_spec, self.config.identifier_field)
        pipeline: Pipeline = [
            {
                "$match": {
                    self.config.identifier_field: {"$in": ids},
                    **deletion_predicate(self.config),
                }
            },
            *plan.stages(),
        ]
        self._lazy.debug(
            "get_by_keys %s pipeline: %s",
            self.config.collection_name,
            lambda: json.dumps(pipeline, default=str),
        )
        documents = await self._aggregate(pipeline, timeout)
        return [self._decode(doc) for doc in documents]

    async def get(self, identifier: str, *, timeout: float | None = None) -> T | None:
        """Get one non-deleted record by identifier.

        Returns:
            The record, or None when it does not exist or is deleted.
        """
        validate_identifier(identifier)
        pipeline: Pipeline = [
            {
                "$match": {
                    self.config.identifier_field: identifier,
                    **deletion_predicate(self.config),
                }
            },
            {"$limit": 1},
        ]
        documents = await self._aggregate(pipeline, timeout)
        if not documents:
            return None
        return self._decode(documents[0])

    async def get_or_raise(self, identifier: str, *, timeout: float | None = None) -> T:
        """Get one record by identifier, raising if absent.

        Raises:
            NotFoundException: If no non-deleted record has this identifier
        """
        record = await self.get(identifier, timeout=timeout)
        if record is None:
            raise NotFoundException(
                detail=f"{self.config.name} not found with identifier={identifier!r}",
                extra={"entity": self.config.name, "identifier": identifier},
            )
        return record

    # ──────────────────────────────────────────────────────────────
    # Internals
    # ──────────────────────────────────────────────────────────────

    async def _aggregate(self, pipeline: Pipeline, timeout: float | None) -> list[Document]:
        try:
            async with asyncio.timeout(timeout):
                return await self.store.aggregate(self.config.collection_name, pipeline)
        except AppException:
            raise
        except Exception as exc:
            mapped = map_store_error(exc)
            self._logger.error(
                "Store query on %s failed: %s",
                self.config.collection_name,
                mapped.detail,
                extra={"collection": self.config.collection_name, "error_type": type(exc).__name__},
            )
            raise mapped from exc

    def _decode(self, document: Document) -> T:
        if self.config.model is None:
            return cast("T", document)
        try:
            return cast("T", self.config.model.model_validate(document))
        except ValidationError as exc:
            raise DatabaseException(
                detail=f"Failed to decode {self.config.name} record",
                cause=exc,
            ) from exc

    def _cursor_for(self, document: Document, plan: SortPlan) -> str:
        try:
            return CursorCodec.create_cursor(
                document, plan.field_names, self.config.identifier_field
            )
        except ValidationError as exc:
            raise DatabaseException(
                detail=f"Failed to build cursor for {self.config.name} record",
                cause=exc,
            ) from exc


__all__ = ["TOTAL_COUNT_FIELD", "EntityRepository"]
