"""Execution plan entity configuration."""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.filters import FilterNode
from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import (
    ExecutionPlanFilterInput,
    ExecutionPlanRecord,
    ExecutionPlanSorterInput,
)


def convert_execution_plan_filter(
    filter_input: ExecutionPlanFilterInput,
) -> FilterNode | None:
    return filter_input.to_filter()


def convert_execution_plan_sorter(
    sorters: Sequence[ExecutionPlanSorterInput],
) -> list[SortField]:
    return sort_fields_from(sorters)


EXECUTION_PLAN_CONFIG = EntityConfig(
    name="executionPlan",
    collection_name="executionPlans",
    deletion_field="actionIndicator",
    deletion_sentinel="DELETE",
    filter_converter=convert_execution_plan_filter,
    sorter_converter=convert_execution_plan_sorter,
    model=ExecutionPlanRecord,
    filter_input=ExecutionPlanFilterInput,
    sorter_input=ExecutionPlanSorterInput,
)
