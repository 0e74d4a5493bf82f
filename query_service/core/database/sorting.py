"""Sort planning with SQL-standard null ordering.

Document stores place nulls first in ascending order. Relational
convention is the opposite: ascending puts nulls last, descending puts
nulls first. The planner gets relational behaviour by pairing every sort
field with a synthetic null flag (1 when the field is null or missing,
else 0) sorted in the same direction as the field, just ahead of it.

Usage:
    plan = plan_sort([SortField("lastName"), SortField("birthDate", SortDirection.DESC)])
    pipeline.extend(plan.stages())              # natural order
    pipeline.extend(plan.stages(reverse=True))  # backward pagination

Stages produced for ``lastName ASC``:
    {"$addFields": {"_sortNull0": {"$cond": [{"$eq": [{"$ifNull": ["$lastName", None]}, None]}, 1, 0]}}}
    {"$sort": {"_sortNull0": 1, "lastName": 1, "identifier": 1}}
    {"$project": {"_sortNull0": 0}}
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

DEFAULT_IDENTIFIER_FIELD = "identifier"
_NULL_FLAG_PREFIX = "_sortNull"


class SortDirection(StrEnum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"

    def reversed(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC

    @property
    def store_value(self) -> int:
        """Direction as the store's ``$sort`` value."""
        return 1 if self is SortDirection.ASC else -1


@dataclass(frozen=True, slots=True)
class SortField:
    """One sort key: a (possibly dotted) field path and its direction."""

    field: str
    direction: SortDirection = SortDirection.ASC


SortSpec = Sequence[SortField]


@dataclass(frozen=True, slots=True)
class SortPlan:
    """Ordered sort keys, always ending with the identifier tiebreaker.

    Attributes:
        keys: Sort keys in priority order, identifier last.
        identifier_field: Field holding the entity's unique identifier.
    """

    keys: tuple[SortField, ...]
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD

    @property
    def field_names(self) -> list[str]:
        """Active non-identifier field names in sort order (cursor layout)."""
        return [key.field for key in self.keys if key.field != self.identifier_field]

    def directions(self, *, reverse: bool = False) -> list[SortField]:
        """Keys with their effective direction, flipped when ``reverse``."""
        if not reverse:
            return list(self.keys)
        return [SortField(key.field, key.direction.reversed()) for key in self.keys]

    def stages(self, *, reverse: bool = False) -> list[dict[str, Any]]:
        """Render the store stages that apply this ordering.

        Args:
            reverse: Render the exact reverse order (backward pagination).

        Returns:
            ``$addFields``/``$sort``/``$project`` stages, or a single
            ``$sort`` when only the identifier is sorted on.
        """
        keys = self.directions(reverse=reverse)
        flags: dict[str, Any] = {}
        sort: dict[str, int] = {}

        for index, key in enumerate(keys):
            if key.field != self.identifier_field:
                flag = f"{_NULL_FLAG_PREFIX}{index}"
                flags[flag] = _null_flag_expression(key.field)
                sort[flag] = key.direction.store_value
            sort[key.field] = key.direction.store_value

        if not flags:
            return [{"$sort": sort}]

        return [
            {"$addFields": flags},
            {"$sort": sort},
            {"$project": dict.fromkeys(flags, 0)},
        ]


def _null_flag_expression(field: str) -> dict[str, Any]:
    """1 when ``field`` is null or missing, else 0."""
    return {"$cond": [{"$eq": [{"$ifNull": [f"${field}", None]}, None]}, 1, 0]}


def plan_sort(
    spec: SortSpec | None,
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD,
) -> SortPlan:
    """Build a sort plan from a client sort specification.

    Duplicate fields keep their first occurrence. The identifier is
    appended ascending unless the caller already sorts on it.

    Args:
        spec: Ordered sort fields, or None for the default ordering.
        identifier_field: Field holding the entity's unique identifier.

    Returns:
        A SortPlan; with no sort fields it orders by identifier ascending.
    """
    keys: list[SortField] = []
    seen: set[str] = set()
    for key in spec or ():
        if key.field in seen:
            continue
        seen.add(key.field)
        keys.append(key)

    if identifier_field not in seen:
        keys.append(SortField(identifier_field, SortDirection.ASC))

    return SortPlan(keys=tuple(keys), identifier_field=identifier_field)


__all__ = [
    "DEFAULT_IDENTIFIER_FIELD",
    "SortDirection",
    "SortField",
    "SortPlan",
    "SortSpec",
    "plan_sort",
]
