"""Core document-store package: filters, sorting, registry and repository.

Registry:
    - EntityConfig: Per-entity collection, soft-delete marker and converters
    - EntityRegistry: Immutable name -> EntityConfig mapping

Filters:
    - FieldFilter, AndFilter, OrFilter: Recursive filter expression
    - translate_filter: Expression -> MongoDB predicate
    - build_base_predicate: Soft-delete exclusion AND filter

Sorting:
    - SortField, SortDirection: One sort key
    - plan_sort / SortPlan: Null-aware stages with identifier tiebreaker

Store:
    - DocumentStore: Async aggregation protocol
    - MongoDocumentStore: Adapter for an async MongoDB database handle
    - create_document_store: Settings -> MongoDocumentStore over AsyncMongoClient
    - map_store_error: Driver failure -> DatabaseException

Repository (import from query_service.core.database.repository):
    - EntityRepository[T]: search / get_by_keys / get / get_or_raise
"""

from query_service.core.database.filters import (
    MISSING,
    AndFilter,
    FieldFilter,
    FilterNode,
    FilterOperator,
    OrFilter,
    all_of,
    any_of,
    build_base_predicate,
    deletion_predicate,
    translate_filter,
)
from query_service.core.database.registry import EntityConfig, EntityRegistry
from query_service.core.database.sorting import (
    SortDirection,
    SortField,
    SortPlan,
    SortSpec,
    plan_sort,
)
from query_service.core.database.store import (
    DocumentStore,
    MongoDocumentStore,
    create_document_store,
    map_store_error,
)

__all__ = [
    "MISSING",
    "AndFilter",
    "DocumentStore",
    "EntityConfig",
    "EntityRegistry",
    "FieldFilter",
    "FilterNode",
    "FilterOperator",
    "MongoDocumentStore",
    "OrFilter",
    "SortDirection",
    "SortField",
    "SortPlan",
    "SortSpec",
    "all_of",
    "any_of",
    "build_base_predicate",
    "create_document_store",
    "deletion_predicate",
    "map_store_error",
    "plan_sort",
    "translate_filter",
]
