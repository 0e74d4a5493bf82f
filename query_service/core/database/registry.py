"""Entity registry: per-entity configuration as data.

Every searchable record type is described by an ``EntityConfig``: which
collection holds it, how soft-deleted documents are marked, and how its
typed filter/sorter inputs become the generic filter expression and sort
specification. The search engine only ever looks at these configs, so
adding an entity never touches the engine.

The registry is built once at startup and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from query_service.core.database.filters import FilterNode
from query_service.core.database.sorting import (
    DEFAULT_IDENTIFIER_FIELD,
    SortField,
    SortPlan,
    plan_sort,
)
from query_service.core.exceptions import InternalServerException

FilterConverter = Callable[[Any], FilterNode | None]
SorterConverter = Callable[[Any], list[SortField]]


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """Static description of one searchable entity.

    Attributes:
        name: Entity name used by callers (e.g. ``customer``).
        collection_name: Store collection holding the documents.
        deletion_field: Dotted path of the soft-delete marker.
        deletion_sentinel: Marker value meaning "deleted".
        filter_converter: Typed filter input -> filter expression.
        sorter_converter: Typed sorter input -> ordered sort fields.
        model: Pydantic model documents are decoded into.
        filter_input: Pydantic model used to validate raw filter dicts.
        sorter_input: Pydantic model used to validate raw sorter dicts.
        identifier_field: Field holding the unique identifier.
    """

    name: str
    collection_name: str
    deletion_field: str
    deletion_sentinel: Any
    filter_converter: FilterConverter | None = None
    sorter_converter: SorterConverter | None = None
    model: type[BaseModel] | None = None
    filter_input: type[BaseModel] | None = None
    sorter_input: type[BaseModel] | None = None
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD

    def convert_filter(self, raw: Any) -> FilterNode | None:
        """Convert a typed filter input; None when absent or unsupported."""
        if raw is None or self.filter_converter is None:
            return None
        return self.filter_converter(raw)

    def convert_sorter(self, raw: Any) -> list[SortField]:
        """Convert a typed sorter input; empty when absent or unsupported."""
        if raw is None or self.sorter_converter is None:
            return []
        return self.sorter_converter(raw)

    def sort_plan(self, raw_sorter: Any = None) -> SortPlan:
        """Sort plan for a sorter input, identifier ascending by default."""
        return plan_sort(self.convert_sorter(raw_sorter), self.identifier_field)


class EntityRegistry(Mapping[str, EntityConfig]):
    """Immutable mapping from entity name to its configuration.

    Example:
        registry = EntityRegistry([customer_config, employee_config])
        config = registry.get_config("customer")
    """

    __slots__ = ("_configs",)

    def __init__(self, configs: Iterable[EntityConfig]) -> None:
        entries: dict[str, EntityConfig] = {}
        for config in configs:
            if config.name in entries:
                msg = f"Duplicate entity configuration: {config.name}"
                raise ValueError(msg)
            entries[config.name] = config
        self._configs: Mapping[str, EntityConfig] = MappingProxyType(entries)

    def __getitem__(self, name: str) -> EntityConfig:
        return self._configs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def get_config(self, name: str) -> EntityConfig:
        """Look up an entity, treating an unknown name as a programming error.

        Raises:
            InternalServerException: If no entity is registered under ``name``.
        """
        try:
            return self._configs[name]
        except KeyError as exc:
            raise InternalServerException(
                detail=f"Unknown entity: {name}",
                extra={"entity": name},
                cause=exc,
            ) from exc


__all__ = [
    "EntityConfig",
    "EntityRegistry",
    "FilterConverter",
    "SorterConverter",
]
