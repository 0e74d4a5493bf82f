"""Position filter for keyset (seek) pagination.

Instead of skipping N documents, the next page is selected with a
predicate meaning "strictly after the cursor in sort order". For sort
keys (a, b, identifier) with cursor values (v1, v2, id):

    (a after v1) OR
    (a = v1 AND b after v2) OR
    (a = v1 AND b = v2 AND identifier after id)

"After" depends on the key's effective direction (flipped for backward
pagination) and follows the null placement used by the sort planner:

    ascending, v set    -> {f: {$gt: v}} OR {f: null}   (nulls come last)
    ascending, v null   -> nothing comes after a trailing null
    descending, v set   -> {f: {$lt: v}}                 (nulls came first)
    descending, v null  -> {f: {$ne: null}}
"""

from __future__ import annotations

from typing import Any

from query_service.core.database.sorting import SortDirection, SortField, SortPlan
from query_service.core.exceptions import InvalidInputException
from query_service.core.pagination.cursor import CursorData


class PositionFilter:
    """Build the seek predicate for a decoded cursor.

    Example:
        plan = plan_sort([SortField("lastName")])
        predicate = PositionFilter(cursor, plan).build()
        # {"$or": [
        #     {"$or": [{"lastName": {"$gt": "Brown"}}, {"lastName": None}]},
        #     {"$and": [{"lastName": "Brown"}, {"identifier": {"$gt": "..."}}]},
        # ]}

    Attributes:
        cursor: Decoded boundary cursor
        plan: Sort plan the cursor was produced under
        backward: Seek before the cursor instead of after it
    """

    def __init__(self, cursor: CursorData, plan: SortPlan, *, backward: bool = False) -> None:
        """Initialize position filter.

        Raises:
            InvalidInputException: If the cursor does not carry one value per
                sort field of the plan.
        """
        expected = len(plan.field_names)
        if len(cursor.sort_field_values) != expected:
            raise InvalidInputException(
                detail="invalid cursor: does not match the requested sort order",
                extra={
                    "expected_values": expected,
                    "received_values": len(cursor.sort_field_values),
                },
            )
        self.cursor = cursor
        self.plan = plan
        self.backward = backward

    def _positioned_keys(self) -> list[tuple[SortField, Any]]:
        """Pair every effective sort key with the cursor's value for it."""
        values = iter(self.cursor.sort_field_values)
        pairs: list[tuple[SortField, Any]] = []
        for key in self.plan.directions(reverse=self.backward):
            if key.field == self.plan.identifier_field:
                pairs.append((key, self.cursor.identifier))
            else:
                pairs.append((key, next(values)))
        return pairs

    def build(self) -> dict[str, Any] | None:
        """Build the seek predicate.

        Returns:
            MongoDB predicate, or None when nothing can follow the cursor
            (never the case while the identifier tiebreaker is present).
        """
        pairs = self._positioned_keys()
        clauses: list[dict[str, Any]] = []

        for index, (key, value) in enumerate(pairs):
            if key.field == self.plan.identifier_field:
                after = _after_identifier(key, value)
            else:
                after = _after(key, value)
            if after is None:
                continue
            prefix = [{prev.field: prev_value} for prev, prev_value in pairs[:index]]
            conditions = [*prefix, after]
            clauses.append(conditions[0] if len(conditions) == 1 else {"$and": conditions})

        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return {"$or": clauses}


def _after_identifier(key: SortField, value: Any) -> dict[str, Any]:
    """Identifiers are never null, so a plain comparison suffices."""
    operator = "$gt" if key.direction is SortDirection.ASC else "$lt"
    return {key.field: {operator: value}}


def _after(key: SortField, value: Any) -> dict[str, Any] | None:
    """Predicate for "strictly after ``value``" on a single key."""
    if key.direction is SortDirection.ASC:
        if value is None:
            return None
        return {"$or": [{key.field: {"$gt": value}}, {key.field: None}]}
    if value is None:
        return {key.field: {"$ne": None}}
    return {key.field: {"$lt": value}}


__all__ = ["PositionFilter"]
