"""Pydantic schemas for the execution plans feature."""

from __future__ import annotations

from pydantic import Field

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import (
    EntityFilterInput,
    EntitySorterInput,
    GuidFilterInput,
)
from query_service.features.records import RecordModel


class ExecutionPlanRecord(RecordModel):
    """Execution plan as returned to callers."""

    customer_id: str | None = None
    action_indicator: str | None = None


class ExecutionPlanFilterInput(EntityFilterInput):
    customer_id: GuidFilterInput | None = None
    and_: list[ExecutionPlanFilterInput] | None = Field(default=None, alias="and")
    or_: list[ExecutionPlanFilterInput] | None = Field(default=None, alias="or")


class ExecutionPlanSorterInput(EntitySorterInput):
    customer_id: SortDirection | None = None
