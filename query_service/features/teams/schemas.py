"""Pydantic schemas for the teams feature."""

from __future__ import annotations

from pydantic import Field

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import (
    BooleanFilterInput,
    EntityFilterInput,
    EntitySorterInput,
    EnumFilterInput,
    StringFilterInput,
)
from query_service.features.records import RecordModel, StatusObject


class TeamRecord(RecordModel):
    """Team as returned to callers."""

    name: str | None = None
    description: str | None = None
    is_shared: bool | None = None
    employee_id: str | None = None
    status: StatusObject | None = None


class TeamStatusFilterInput(EntityFilterInput):
    """Conditions on the ``status`` sub-document."""

    creation: EnumFilterInput | None = None
    deletion: EnumFilterInput | None = None
    and_: list[TeamStatusFilterInput] | None = Field(default=None, alias="and")
    or_: list[TeamStatusFilterInput] | None = Field(default=None, alias="or")


class TeamFilterInput(EntityFilterInput):
    name: StringFilterInput | None = None
    description: StringFilterInput | None = None
    is_shared: BooleanFilterInput | None = None
    status: TeamStatusFilterInput | None = None
    and_: list[TeamFilterInput] | None = Field(default=None, alias="and")
    or_: list[TeamFilterInput] | None = Field(default=None, alias="or")


class TeamSorterInput(EntitySorterInput):
    name: SortDirection | None = None
    description: SortDirection | None = None
    is_shared: SortDirection | None = None
    employee_id: SortDirection | None = None
