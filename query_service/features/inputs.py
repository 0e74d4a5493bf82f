"""Typed filter and sorter inputs shared by every entity.

Scalar filter inputs describe the conditions allowed on one field
(``StringFilterInput``, ``DateTimeFilterInput``, ...). Entity filter inputs
map their attributes to document paths and produce one filter expression
for the whole request. Both levels accept nested ``and``/``or`` lists.

Example:
    CustomerFilterInput.model_validate({
        "lastName": {"startsWith": "and"},
        "or": [{"isShared": {"eq": True}}, {"createDate": {"gte": "2024-01-01T00:00:00Z"}}],
    }).to_filter()
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from query_service.core.database.filters import (
    FieldFilter,
    FilterNode,
    FilterOperator,
    all_of,
    any_of,
)
from query_service.core.database.sorting import SortDirection, SortField
from query_service.core.validators.common import validate_identifier_optional

# Model attribute holding each operator's value
_OPERATOR_ATTRS: dict[FilterOperator, str] = {
    FilterOperator.EQ: "eq",
    FilterOperator.NEQ: "neq",
    FilterOperator.IN: "in_",
    FilterOperator.NIN: "nin",
    FilterOperator.CONTAINS: "contains",
    FilterOperator.STARTS_WITH: "starts_with",
    FilterOperator.ENDS_WITH: "ends_with",
    FilterOperator.GT: "gt",
    FilterOperator.GTE: "gte",
    FilterOperator.LT: "lt",
    FilterOperator.LTE: "lte",
}

_NULLABLE_OPERATORS = frozenset({FilterOperator.EQ, FilterOperator.NEQ})
_COMBINATOR_ATTRS = frozenset({"and_", "or_"})


class FilterInput(BaseModel):
    """Base for filter inputs: camelCase aliases, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True
    )


class ScalarFilterInput(FilterInput):
    """Conditions on a single field.

    Subclasses declare which operators they support in ``OPERATORS`` and
    the matching attributes. An explicit ``null`` for ``eq``/``neq``
    matches (or excludes) null and missing values; any other unset or
    null operator adds no condition.
    """

    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = ()

    def to_filter(self, field: str) -> FilterNode | None:
        conditions: list[FilterNode | None] = []
        for operator in self.OPERATORS:
            attr = _OPERATOR_ATTRS[operator]
            if attr not in self.model_fields_set:
                continue
            value = getattr(self, attr)
            if value is None and operator not in _NULLABLE_OPERATORS:
                continue
            conditions.append(FieldFilter(field, operator, value))

        and_: Sequence[ScalarFilterInput] | None = getattr(self, "and_", None)
        or_: Sequence[ScalarFilterInput] | None = getattr(self, "or_", None)
        if and_:
            conditions.append(all_of([child.to_filter(field) for child in and_]))
        if or_:
            conditions.append(any_of([child.to_filter(field) for child in or_]))
        return all_of(conditions)


class StringFilterInput(ScalarFilterInput):
    """Text conditions; pattern operators are case-insensitive and literal."""

    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (
        FilterOperator.EQ,
        FilterOperator.NEQ,
        FilterOperator.IN,
        FilterOperator.NIN,
        FilterOperator.CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    )

    eq: str | None = None
    neq: str | None = None
    in_: list[str] | None = Field(default=None, alias="in")
    nin: list[str] | None = None
    contains: str | None = None
    starts_with: str | None = Field(default=None, alias="startsWith")
    ends_with: str | None = Field(default=None, alias="endsWith")
    and_: list[StringFilterInput] | None = Field(default=None, alias="and")
    or_: list[StringFilterInput] | None = Field(default=None, alias="or")


class BooleanFilterInput(ScalarFilterInput):
    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (FilterOperator.EQ, FilterOperator.NEQ)

    eq: bool | None = None
    neq: bool | None = None
    and_: list[BooleanFilterInput] | None = Field(default=None, alias="and")
    or_: list[BooleanFilterInput] | None = Field(default=None, alias="or")


class DateTimeFilterInput(ScalarFilterInput):
    """Date comparisons. An empty string for ``eq``/``neq`` means null."""

    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (
        FilterOperator.EQ,
        FilterOperator.NEQ,
        FilterOperator.GT,
        FilterOperator.GTE,
        FilterOperator.LT,
        FilterOperator.LTE,
    )

    eq: datetime | None = None
    neq: datetime | None = None
    gt: datetime | None = None
    gte: datetime | None = None
    lt: datetime | None = None
    lte: datetime | None = None
    and_: list[DateTimeFilterInput] | None = Field(default=None, alias="and")
    or_: list[DateTimeFilterInput] | None = Field(default=None, alias="or")

    @field_validator("eq", "neq", mode="before")
    @classmethod
    def empty_string_is_null(cls, v: Any) -> Any:
        if v == "":
            return None
        return v


class GuidFilterInput(ScalarFilterInput):
    """Identifier conditions; range operators compare the string form."""

    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (
        FilterOperator.EQ,
        FilterOperator.NEQ,
        FilterOperator.IN,
        FilterOperator.NIN,
        FilterOperator.GT,
        FilterOperator.GTE,
        FilterOperator.LT,
        FilterOperator.LTE,
    )

    eq: str | None = None
    neq: str | None = None
    in_: list[str] | None = Field(default=None, alias="in")
    nin: list[str] | None = None
    gt: str | None = None
    gte: str | None = None
    lt: str | None = None
    lte: str | None = None
    and_: list[GuidFilterInput] | None = Field(default=None, alias="and")
    or_: list[GuidFilterInput] | None = Field(default=None, alias="or")

    @field_validator("eq", "neq")
    @classmethod
    def check_identifier(cls, v: str | None) -> str | None:
        return validate_identifier_optional(v)

    @field_validator("in_", "nin")
    @classmethod
    def check_identifiers(cls, v: list[str] | None) -> list[str] | None:
        if v is not None:
            for value in v:
                validate_identifier_optional(value)
        return v


class EnumFilterInput(ScalarFilterInput):
    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (
        FilterOperator.EQ,
        FilterOperator.NEQ,
        FilterOperator.IN,
        FilterOperator.NIN,
    )

    eq: str | None = None
    neq: str | None = None
    in_: list[str] | None = Field(default=None, alias="in")
    nin: list[str] | None = None
    and_: list[EnumFilterInput] | None = Field(default=None, alias="and")
    or_: list[EnumFilterInput] | None = Field(default=None, alias="or")


class CollectionFilterInput(ScalarFilterInput):
    """Membership conditions on an array field."""

    OPERATORS: ClassVar[tuple[FilterOperator, ...]] = (FilterOperator.IN, FilterOperator.NIN)

    in_: list[str] | None = Field(default=None, alias="in")
    nin: list[str] | None = None
    and_: list[CollectionFilterInput] | None = Field(default=None, alias="and")
    or_: list[CollectionFilterInput] | None = Field(default=None, alias="or")


class EntityFilterInput(FilterInput):
    """Filter over the fields of one record type.

    Every attribute filters the document path named by its camelCase
    alias. Attributes hold scalar filter inputs or nested entity filter
    inputs (for sub-documents such as ``status``), whose paths are prefixed.
    """

    def to_filter(self, prefix: str = "") -> FilterNode | None:
        conditions: list[FilterNode | None] = []
        for attr, path in _field_paths(type(self)):
            value = getattr(self, attr)
            if isinstance(value, EntityFilterInput):
                conditions.append(value.to_filter(f"{prefix}{path}."))
            elif isinstance(value, ScalarFilterInput):
                conditions.append(value.to_filter(f"{prefix}{path}"))

        and_: Sequence[EntityFilterInput] | None = getattr(self, "and_", None)
        or_: Sequence[EntityFilterInput] | None = getattr(self, "or_", None)
        if and_:
            conditions.append(all_of([child.to_filter(prefix) for child in and_]))
        if or_:
            conditions.append(any_of([child.to_filter(prefix) for child in or_]))
        return all_of(conditions)


class EntitySorterInput(BaseModel):
    """One sorter object: each set attribute is a sort key.

    Keys are taken in declaration order and sort the path named by the
    attribute's camelCase alias; a list of sorter objects is read in list
    order (see ``sort_fields_from``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True
    )

    def to_sort_fields(self, prefix: str = "") -> list[SortField]:
        fields: list[SortField] = []
        for attr, path in _field_paths(type(self)):
            value = getattr(self, attr)
            if isinstance(value, EntitySorterInput):
                fields.extend(value.to_sort_fields(f"{prefix}{path}."))
            elif value is not None:
                fields.append(SortField(f"{prefix}{path}", SortDirection(value)))
        return fields


def _field_paths(model: type[BaseModel]) -> list[tuple[str, str]]:
    """(attribute, document path) pairs, skipping the and/or combinators."""
    return [
        (name, info.alias or name)
        for name, info in model.model_fields.items()
        if name not in _COMBINATOR_ATTRS
    ]


def sort_fields_from(sorters: Sequence[EntitySorterInput] | None) -> list[SortField]:
    """Flatten a list of sorter objects into ordered sort fields."""
    fields: list[SortField] = []
    for sorter in sorters or ():
        fields.extend(sorter.to_sort_fields())
    return fields


__all__ = [
    "BooleanFilterInput",
    "CollectionFilterInput",
    "DateTimeFilterInput",
    "EntityFilterInput",
    "EntitySorterInput",
    "EnumFilterInput",
    "FilterInput",
    "GuidFilterInput",
    "ScalarFilterInput",
    "StringFilterInput",
    "sort_fields_from",
]
