"""Execution plans feature: execution plan records by customer."""

from __future__ import annotations

from .config import EXECUTION_PLAN_CONFIG
from .schemas import (
    ExecutionPlanFilterInput,
    ExecutionPlanRecord,
    ExecutionPlanSorterInput,
)

__all__ = [
    "EXECUTION_PLAN_CONFIG",
    "ExecutionPlanFilterInput",
    "ExecutionPlanRecord",
    "ExecutionPlanSorterInput",
]
