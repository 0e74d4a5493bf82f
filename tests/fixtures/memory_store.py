"""In-memory document store evaluating the aggregation subset the engine emits.

Supported stages: ``$match``, ``$addFields``, ``$sort``, ``$project``
(exclusion), ``$limit``, ``$facet`` and ``$count``.

``$match`` understands equality (null matches missing), ``$ne``, ``$in``,
``$nin``, ``$gt``/``$gte``/``$lt``/``$lte``, ``$regex`` with ``$options``,
``$and``/``$or`` and dotted paths. Comparisons and sorting follow MongoDB's
cross-type ordering (null < numbers < strings < objects < arrays < booleans
< dates); range operators only match values of the same type bracket.
"""

from __future__ import annotations

import asyncio
import copy
import functools
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

_MISSING = object()


class MemoryDocumentStore:
    """DocumentStore over plain dicts grouped by collection.

    Attributes:
        collections: Documents per collection name.
        calls: ``(collection, pipeline)`` for every aggregation executed.
        fail_with: Exception raised by the next aggregations, if set.
        delay: Seconds to sleep before answering (deadline tests).
    """

    def __init__(self, collections: Mapping[str, Iterable[dict[str, Any]]] | None = None) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            name: list(docs) for name, docs in (collections or {}).items()
        }
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []
        self.fail_with: BaseException | None = None
        self.delay: float = 0.0

    def insert(self, collection: str, *documents: dict[str, Any]) -> None:
        self.collections.setdefault(collection, []).extend(documents)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def aggregate(self, collection: str, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.calls.append((collection, copy.deepcopy(pipeline)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        documents = copy.deepcopy(self.collections.get(collection, []))
        return run_pipeline(documents, pipeline)


# ──────────────────────────────────────────────────────────────
# Pipeline evaluation
# ──────────────────────────────────────────────────────────────


def run_pipeline(documents: list[dict[str, Any]], pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for stage in pipeline:
        ((name, spec),) = stage.items()
        documents = _STAGES[name](documents, spec)
    return documents


def _stage_match(documents: list[dict[str, Any]], spec: dict[str, Any]) -> list[dict[str, Any]]:
    return [doc for doc in documents if matches(doc, spec)]


def _stage_add_fields(documents: list[dict[str, Any]], spec: dict[str, Any]) -> list[dict[str, Any]]:
    for doc in documents:
        computed = {name: evaluate(doc, expression) for name, expression in spec.items()}
        doc.update(computed)
    return documents


def _stage_sort(documents: list[dict[str, Any]], spec: dict[str, int]) -> list[dict[str, Any]]:
    def compare(left: dict[str, Any], right: dict[str, Any]) -> int:
        for field, direction in spec.items():
            result = compare_values(_sort_value(left, field), _sort_value(right, field))
            if result:
                return result * direction
        return 0

    return sorted(documents, key=functools.cmp_to_key(compare))


def _stage_project(documents: list[dict[str, Any]], spec: dict[str, int]) -> list[dict[str, Any]]:
    if any(spec.values()):
        raise NotImplementedError("only exclusion projections are supported")
    for doc in documents:
        for field in spec:
            doc.pop(field, None)
    return documents


def _stage_limit(documents: list[dict[str, Any]], spec: int) -> list[dict[str, Any]]:
    return documents[:spec]


def _stage_facet(documents: list[dict[str, Any]], spec: dict[str, list[dict[str, Any]]]) -> list[dict[str, Any]]:
    return [
        {name: run_pipeline(copy.deepcopy(documents), sub) for name, sub in spec.items()}
    ]


def _stage_count(documents: list[dict[str, Any]], spec: str) -> list[dict[str, Any]]:
    if not documents:
        return []
    return [{spec: len(documents)}]


_STAGES = {
    "$match": _stage_match,
    "$addFields": _stage_add_fields,
    "$sort": _stage_sort,
    "$project": _stage_project,
    "$limit": _stage_limit,
    "$facet": _stage_facet,
    "$count": _stage_count,
}


# ──────────────────────────────────────────────────────────────
# Query predicates
# ──────────────────────────────────────────────────────────────


def matches(doc: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    for key, condition in query.items():
        if key == "$and":
            if not all(matches(doc, sub) for sub in condition):
                return False
        elif key == "$or":
            if not any(matches(doc, sub) for sub in condition):
                return False
        elif not _field_matches(get_value(doc, key), condition):
            return False
    return True


def _is_operator_doc(condition: Any) -> bool:
    return isinstance(condition, Mapping) and bool(condition) and all(
        str(key).startswith("$") for key in condition
    )


def _field_matches(value: Any, condition: Any) -> bool:
    if not _is_operator_doc(condition):
        return _equals(value, condition)

    options = condition.get("$options", "")
    for operator, operand in condition.items():
        if operator == "$options":
            continue
        if operator == "$ne":
            ok = not _equals(value, operand)
        elif operator == "$in":
            ok = any(_equals(value, item) for item in operand)
        elif operator == "$nin":
            ok = not any(_equals(value, item) for item in operand)
        elif operator in _RANGE_CHECKS:
            ok = _range_matches(value, operand, _RANGE_CHECKS[operator])
        elif operator == "$regex":
            ok = _regex_matches(value, operand, options)
        else:
            raise NotImplementedError(f"unsupported query operator {operator}")
        if not ok:
            return False
    return True


def _equals(value: Any, expected: Any) -> bool:
    if expected is None:
        return value is _MISSING or value is None
    if value is _MISSING:
        return False
    if isinstance(value, list) and not isinstance(expected, list):
        return any(_scalar_equals(item, expected) for item in value)
    return _scalar_equals(value, expected)


def _scalar_equals(value: Any, expected: Any) -> bool:
    return type_rank(value) == type_rank(expected) and value == expected


_RANGE_CHECKS = {
    "$gt": lambda result: result > 0,
    "$gte": lambda result: result >= 0,
    "$lt": lambda result: result < 0,
    "$lte": lambda result: result <= 0,
}


def _range_matches(value: Any, operand: Any, check: Any) -> bool:
    candidates = value if isinstance(value, list) else [value]
    for candidate in candidates:
        if candidate is _MISSING or candidate is None:
            continue
        if type_rank(candidate) != type_rank(operand):
            continue
        if check(compare_values(candidate, operand)):
            return True
    return False


def _regex_matches(value: Any, pattern: str, options: str) -> bool:
    flags = re.IGNORECASE if "i" in options else 0
    candidates = value if isinstance(value, list) else [value]
    return any(
        isinstance(candidate, str) and re.search(pattern, candidate, flags) is not None
        for candidate in candidates
    )


# ──────────────────────────────────────────────────────────────
# Expressions ($addFields)
# ──────────────────────────────────────────────────────────────


def evaluate(doc: Mapping[str, Any], expression: Any) -> Any:
    if isinstance(expression, str) and expression.startswith("$"):
        value = get_value(doc, expression[1:])
        return None if value is _MISSING else value
    if isinstance(expression, Mapping) and len(expression) == 1:
        ((operator, args),) = expression.items()
        if operator == "$cond":
            condition, then, otherwise = args
            return evaluate(doc, then) if evaluate(doc, condition) else evaluate(doc, otherwise)
        if operator == "$eq":
            left, right = (evaluate(doc, arg) for arg in args)
            return compare_values(left, right) == 0
        if operator == "$ifNull":
            value, replacement = args
            result = evaluate(doc, value)
            return evaluate(doc, replacement) if result is None else result
    return expression


# ──────────────────────────────────────────────────────────────
# Values and ordering
# ──────────────────────────────────────────────────────────────


def get_value(doc: Mapping[str, Any], path: str) -> Any:
    """Dotted path lookup returning a private marker for missing fields."""
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _sort_value(doc: Mapping[str, Any], path: str) -> Any:
    value = get_value(doc, path)
    return None if value is _MISSING else value


def type_rank(value: Any) -> int:
    if value is None or value is _MISSING:
        return 0
    if isinstance(value, bool):
        return 5
    if isinstance(value, int | float):
        return 1
    if isinstance(value, str):
        return 2
    if isinstance(value, Mapping):
        return 3
    if isinstance(value, list):
        return 4
    if isinstance(value, datetime):
        return 6
    return 7


def compare_values(left: Any, right: Any) -> int:
    left_rank, right_rank = type_rank(left), type_rank(right)
    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1
    if left_rank == 0:
        return 0
    if left_rank in (3, 4):
        left, right = repr(left), repr(right)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


__all__ = ["MemoryDocumentStore", "matches", "run_pipeline"]
