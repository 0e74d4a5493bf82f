"""Request surface for entity search and key lookups.

``QueryService`` is the single entry point used by API layers. It resolves
the entity configuration, validates raw filter/sorter payloads into the
entity's typed inputs, and delegates to one ``EntityRepository`` per entity,
timing every store call with slow-query detection.

Example:
    service = QueryService(MongoDocumentStore(database))

    page = await service.search(
        "customer",
        filter={"lastName": {"startsWith": "and"}},
        sorter=[{"lastName": "ASC"}],
        first=20,
    )
    more = await service.search("customer", first=20, after=page.end_cursor)

    customers = await service.get_by_keys("customer", ["2f1c...", "9a0b..."])
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from query_service.core.database.repository import EntityRepository
from query_service.core.exceptions import AppException, InvalidInputException, to_app_exception
from query_service.core.pagination.schemas import PageResult, PageWindow
from query_service.core.services.base import BaseService
from query_service.core.settings.loader import (
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from query_service.features.registry import build_entity_registry
from query_service.infra.logging import log_context, query_context

if TYPE_CHECKING:
    from query_service.core.database.filters import FilterNode
    from query_service.core.database.registry import EntityConfig, EntityRegistry
    from query_service.core.database.sorting import SortField
    from query_service.core.database.store import DocumentStore
    from query_service.core.settings.database import DocumentStoreSettings
    from query_service.core.settings.logs import LoggingSettings
    from query_service.core.settings.pagination import PaginationSettings

R = TypeVar("R")


class QueryService(BaseService):
    """Search, batch-by-key and single-key reads for every registered entity.

    ``filter`` accepts the entity's filter input model or a plain dict in
    its camelCase shape. ``sorter`` accepts a list of sorter inputs (models
    or dicts); a single sorter object is treated as a one-element list.
    Entities without a filter or sorter converter ignore that argument.
    Any other shape is rejected as invalid input.
    """

    def __init__(
        self,
        store: DocumentStore,
        registry: EntityRegistry | None = None,
        *,
        pagination: PaginationSettings | None = None,
        db_settings: DocumentStoreSettings | None = None,
        log_settings: LoggingSettings | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.registry = registry or build_entity_registry()
        self.pagination = pagination or get_pagination_settings()
        self.db_settings = db_settings or get_db_settings()
        self.log_settings = log_settings or get_logging_settings()
        self._repositories: dict[str, EntityRepository[Any]] = {}

    def repository(self, entity: str) -> EntityRepository[Any]:
        """Repository for ``entity``, created on first use.

        Raises:
            InternalServerException: If the entity is not registered.
        """
        repo = self._repositories.get(entity)
        if repo is None:
            config = self.registry.get_config(entity)
            repo = EntityRepository[Any](config, self.store, pagination=self.pagination)
            self._repositories[entity] = repo
        return repo

    async def search(
        self,
        entity: str,
        filter: Any = None,
        sorter: Any = None,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
    ) -> PageResult[Any]:
        """Filtered, sorted, cursor-paginated search over one entity.

        Raises:
            InvalidInputException: Malformed filter, sorter, window or cursor
            DatabaseException: Store failure or timeout
            InternalServerException: Unknown entity or unexpected conversion failure
        """
        repo = self.repository(entity)
        filter_node = self._parse_filter(repo.config, filter)
        sort_fields = self._parse_sorter(repo.config, sorter)
        window = self._parse_window(first=first, after=after, last=last, before=before)

        with log_context(entity=entity):
            self.logger.info(
                "Starting %s search",
                entity,
                extra={
                    "entity": entity,
                    "has_filter": filter_node is not None,
                    "first": first,
                    "last": last,
                    "has_after_cursor": window.after is not None,
                    "has_before_cursor": window.before is not None,
                },
            )

            async with query_context(
                f"{entity}Search",
                threshold=self.log_settings.slow_query_threshold_search,
                logger=self.logger,
                entity=entity,
            ) as ctx:
                page = await repo.search(
                    filter_node,
                    sort_fields,
                    window,
                    timeout=self.db_settings.query_timeout,
                )
                ctx.set_result(total_count=page.total_count, returned=len(page.items))
        return page

    async def get_by_keys(
        self,
        entity: str,
        identifiers: Sequence[str],
        sorter: Any = None,
    ) -> list[Any]:
        """Records for the given identifiers; unknown or deleted ones are omitted.

        Raises:
            InvalidInputException: Batch too large, malformed identifier or sorter
            DatabaseException: Store failure or timeout
        """
        repo = self.repository(entity)
        sort_fields = self._parse_sorter(repo.config, sorter)

        with log_context(entity=entity):
            async with query_context(
                entity,
                threshold=self.log_settings.slow_query_threshold_simple,
                logger=self.logger,
                entity=entity,
                requested=len(identifiers),
            ) as ctx:
                records = await repo.get_by_keys(
                    identifiers, sort_fields, timeout=self.db_settings.query_timeout
                )
                ctx.set_result(returned=len(records))
        return records

    async def get(self, entity: str, identifier: str) -> Any | None:
        """One non-deleted record by identifier, or None."""
        repo = self.repository(entity)
        with log_context(entity=entity):
            async with query_context(
                entity,
                threshold=self.log_settings.slow_query_threshold_simple,
                logger=self.logger,
                entity=entity,
            ) as ctx:
                record = await repo.get(identifier, timeout=self.db_settings.query_timeout)
                ctx.set_result(found=record is not None)
        return record

    async def get_or_raise(self, entity: str, identifier: str) -> Any:
        """One non-deleted record by identifier.

        Raises:
            NotFoundException: If the record does not exist or is deleted
        """
        repo = self.repository(entity)
        with log_context(entity=entity):
            async with query_context(
                entity,
                threshold=self.log_settings.slow_query_threshold_simple,
                logger=self.logger,
                entity=entity,
            ):
                return await repo.get_or_raise(identifier, timeout=self.db_settings.query_timeout)

    # ──────────────────────────────────────────────────────────────
    # Input parsing
    # ──────────────────────────────────────────────────────────────

    def _parse_filter(self, config: EntityConfig, raw: Any) -> FilterNode | None:
        if raw is None or config.filter_converter is None:
            return None
        what = f"{config.name} filter"
        if isinstance(raw, Mapping) and config.filter_input is not None:
            raw = _validate_input(config.filter_input, raw, what)
        elif config.filter_input is not None and not isinstance(raw, config.filter_input):
            raise _unexpected_shape(what, "an object", raw)
        filter_node = self._convert(config.convert_filter, raw, what)
        self._lazy.debug("%s filter: %r", config.name, lambda: filter_node)
        return filter_node

    def _parse_sorter(self, config: EntityConfig, raw: Any) -> list[SortField]:
        if raw is None or config.sorter_converter is None:
            return []
        what = f"{config.name} sorter"
        if isinstance(raw, (Mapping, BaseModel)):
            items = [raw]
        elif isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
            items = list(raw)
        else:
            raise _unexpected_shape(what, "a list of objects", raw)

        model = config.sorter_input
        if model is not None:
            parsed = []
            for index, item in enumerate(items):
                if isinstance(item, Mapping):
                    item = _validate_input(model, item, what)
                elif not isinstance(item, model):
                    raise _unexpected_shape(f"{what} at position {index}", "an object", item)
                parsed.append(item)
            items = parsed
        return self._convert(config.convert_sorter, items, what)

    def _convert(self, converter: Callable[[Any], R], raw: Any, what: str) -> R:
        try:
            return converter(raw)
        except AppException:
            raise
        except Exception as exc:
            self.logger.exception(
                "Converting %s failed", what, extra={"error_type": type(exc).__name__}
            )
            raise to_app_exception(exc) from exc

    @staticmethod
    def _parse_window(**window: Any) -> PageWindow:
        try:
            return PageWindow(**window)
        except ValidationError as exc:
            raise InvalidInputException(
                detail=f"invalid page window: {_first_error(exc)}",
                cause=exc,
            ) from exc


def _validate_input(model: type[BaseModel], raw: Mapping[str, Any], what: str) -> BaseModel:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInputException(
            detail=f"invalid {what}: {_first_error(exc)}",
            extra={"errors": exc.errors(include_url=False, include_context=False)},
            cause=exc,
        ) from exc


def _unexpected_shape(what: str, expected: str, raw: Any) -> InvalidInputException:
    return InvalidInputException(
        detail=f"invalid {what}: expected {expected}, got {type(raw).__name__}",
        extra={"received_type": type(raw).__name__},
    )


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


__all__ = ["QueryService"]
