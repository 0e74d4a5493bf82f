"""Pydantic schemas for the employees feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import (
    EntityFilterInput,
    EntitySorterInput,
    StringFilterInput,
)
from query_service.features.records import RecordModel, StatusObject


class EmployeeRecord(RecordModel):
    """Employee as returned to callers."""

    first_name: str | None = None
    last_name: str | None = None
    user_email: str | None = None
    birth_date: datetime | None = None
    status: StatusObject | None = None


class EmployeeFilterInput(EntityFilterInput):
    first_name: StringFilterInput | None = None
    last_name: StringFilterInput | None = None
    user_email: StringFilterInput | None = None
    and_: list[EmployeeFilterInput] | None = Field(default=None, alias="and")
    or_: list[EmployeeFilterInput] | None = Field(default=None, alias="or")


class EmployeeSorterInput(EntitySorterInput):
    first_name: SortDirection | None = None
    last_name: SortDirection | None = None
    birth_date: SortDirection | None = None
    user_email: SortDirection | None = None
