"""Pydantic schemas for the reference portfolios feature."""

from __future__ import annotations

from pydantic import Field

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import (
    EntityFilterInput,
    EntitySorterInput,
    GuidFilterInput,
)
from query_service.features.records import RecordModel


class ReferencePortfolioRecord(RecordModel):
    """Reference portfolio as returned to callers."""

    customer_id: str | None = None
    action_indicator: str | None = None


class ReferencePortfolioFilterInput(EntityFilterInput):
    customer_id: GuidFilterInput | None = None
    and_: list[ReferencePortfolioFilterInput] | None = Field(default=None, alias="and")
    or_: list[ReferencePortfolioFilterInput] | None = Field(default=None, alias="or")


class ReferencePortfolioSorterInput(EntitySorterInput):
    customer_id: SortDirection | None = None
