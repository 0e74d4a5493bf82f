"""Filter expressions and their translation to store predicates.

Filters arrive as typed per-entity inputs and are converted into one
uniform recursive expression:

    FieldFilter(field, operator, value)   a single comparison
    AndFilter(children)                   all children must match
    OrFilter(children)                    any child must match

``translate_filter`` turns that expression into a MongoDB query document.
A leaf without a value contributes nothing and is dropped from its parent,
so an absent condition never narrows the result.

Usage:
    node = AndFilter((
        FieldFilter("lastName", FilterOperator.STARTS_WITH, "and"),
        FieldFilter("isShared", FilterOperator.EQ, True),
    ))
    translate_filter(node)
    # {"$and": [{"lastName": {"$regex": "^and", "$options": "i"}}, {"isShared": True}]}
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from query_service.core.database.registry import EntityConfig


class _Missing:
    """Marker for a comparison value that was never supplied."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class FilterOperator(StrEnum):
    """Comparison operators supported by field filters."""

    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NIN = "nin"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


_TEXT_OPERATORS = frozenset(
    {FilterOperator.CONTAINS, FilterOperator.STARTS_WITH, FilterOperator.ENDS_WITH}
)
_SET_OPERATORS = {FilterOperator.IN: "$in", FilterOperator.NIN: "$nin"}
_RANGE_OPERATORS = {
    FilterOperator.GT: "$gt",
    FilterOperator.GTE: "$gte",
    FilterOperator.LT: "$lt",
    FilterOperator.LTE: "$lte",
}


@dataclass(frozen=True, slots=True)
class FieldFilter:
    """Compare one (possibly dotted) field against a value.

    ``value`` defaults to MISSING, meaning "no condition". For ``eq`` and
    ``neq`` an explicit ``None`` matches (or excludes) null and missing
    fields.
    """

    field: str
    operator: FilterOperator
    value: Any = MISSING


@dataclass(frozen=True, slots=True)
class AndFilter:
    """Conjunction of child filters."""

    children: tuple[FilterNode, ...] = ()


@dataclass(frozen=True, slots=True)
class OrFilter:
    """Disjunction of child filters."""

    children: tuple[FilterNode, ...] = ()


FilterNode = FieldFilter | AndFilter | OrFilter


def all_of(children: Sequence[FilterNode | None]) -> FilterNode | None:
    """Combine children with AND, skipping ``None`` entries.

    Returns:
        The only child when one remains, an AndFilter for several, None for none.
    """
    kept = tuple(child for child in children if child is not None)
    if not kept:
        return None
    if len(kept) == 1:
        return kept[0]
    return AndFilter(kept)


def any_of(children: Sequence[FilterNode | None]) -> FilterNode | None:
    """Combine children with OR, skipping ``None`` entries."""
    kept = tuple(child for child in children if child is not None)
    if not kept:
        return None
    if len(kept) == 1:
        return kept[0]
    return OrFilter(kept)


def translate_filter(node: FilterNode | None) -> dict[str, Any]:
    """Translate a filter expression into a store predicate.

    Args:
        node: Filter expression, or None for "match everything".

    Returns:
        MongoDB query document; ``{}`` matches all documents.
    """
    if node is None:
        return {}
    if isinstance(node, FieldFilter):
        return _translate_leaf(node)
    if isinstance(node, AndFilter):
        return _translate_combinator("$and", node.children)
    if isinstance(node, OrFilter):
        return _translate_combinator("$or", node.children)
    msg = f"Unsupported filter node: {type(node).__name__}"
    raise TypeError(msg)


def _translate_combinator(
    operator: str, children: tuple[FilterNode, ...]
) -> dict[str, Any]:
    translated = [translate_filter(child) for child in children]
    kept = [predicate for predicate in translated if predicate]
    if not kept:
        return {}
    if len(kept) == 1:
        return kept[0]
    return {operator: kept}


def _translate_leaf(leaf: FieldFilter) -> dict[str, Any]:
    value = leaf.value
    if value is MISSING:
        return {}

    operator = FilterOperator(leaf.operator)

    if operator is FilterOperator.EQ:
        return {leaf.field: value}
    if operator is FilterOperator.NEQ:
        return {leaf.field: {"$ne": value}}

    if operator in _SET_OPERATORS:
        values = list(value) if value is not None else []
        if not values:
            return {}
        return {leaf.field: {_SET_OPERATORS[operator]: values}}

    if operator in _TEXT_OPERATORS:
        if value is None:
            return {}
        return {leaf.field: {"$regex": _text_pattern(operator, str(value)), "$options": "i"}}

    if value is None:
        return {}
    return {leaf.field: {_RANGE_OPERATORS[operator]: value}}


def _text_pattern(operator: FilterOperator, text: str) -> str:
    """Regex for a case-insensitive substring, prefix or suffix match.

    User text is escaped so it always matches literally.
    """
    escaped = re.escape(text)
    if operator is FilterOperator.STARTS_WITH:
        return f"^{escaped}"
    if operator is FilterOperator.ENDS_WITH:
        return f"{escaped}$"
    return escaped


def deletion_predicate(config: EntityConfig) -> dict[str, Any]:
    """Predicate excluding soft-deleted records of an entity."""
    return {config.deletion_field: {"$ne": config.deletion_sentinel}}


def build_base_predicate(
    config: EntityConfig,
    node: FilterNode | None = None,
) -> dict[str, Any]:
    """Soft-delete exclusion AND the translated client filter.

    Args:
        config: Entity whose deletion field/sentinel apply.
        node: Client filter expression, if any.

    Returns:
        The deletion clause alone when the filter adds nothing, otherwise
        ``{"$and": [deletion clause, filter]}``.
    """
    not_deleted = deletion_predicate(config)
    predicate = translate_filter(node)
    if not predicate:
        return not_deleted
    return {"$and": [not_deleted, predicate]}


__all__ = [
    "MISSING",
    "AndFilter",
    "FieldFilter",
    "FilterNode",
    "FilterOperator",
    "OrFilter",
    "all_of",
    "any_of",
    "build_base_predicate",
    "deletion_predicate",
    "translate_filter",
]
