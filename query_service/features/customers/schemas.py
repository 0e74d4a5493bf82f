"""Pydantic schemas for the customers feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import (
    BooleanFilterInput,
    CollectionFilterInput,
    DateTimeFilterInput,
    EntityFilterInput,
    EntitySorterInput,
    StringFilterInput,
)
from query_service.features.records import DocumentModel, RecordModel, StatusObject


class PaymentInfo(DocumentModel):
    status: str | None = None


class CustomerRecord(RecordModel):
    """Customer as returned to callers."""

    first_name: str | None = None
    last_name: str | None = None
    user_email: str | None = None
    employee_email: str | None = None
    birth_date: datetime | None = None
    is_shared: bool | None = None
    create_date: datetime | None = None
    customer_groups: list[str] = Field(default_factory=list)
    payment: PaymentInfo | None = None
    status: StatusObject | None = None


class CustomerFilterInput(EntityFilterInput):
    """Filter for customer search."""

    first_name: StringFilterInput | None = None
    last_name: StringFilterInput | None = None
    user_email: StringFilterInput | None = None
    employee_email: StringFilterInput | None = None
    is_shared: BooleanFilterInput | None = None
    create_date: DateTimeFilterInput | None = None
    customer_groups: CollectionFilterInput | None = None
    and_: list[CustomerFilterInput] | None = Field(default=None, alias="and")
    or_: list[CustomerFilterInput] | None = Field(default=None, alias="or")


class PaymentSorterInput(EntitySorterInput):
    status: SortDirection | None = None


class CustomerSorterInput(EntitySorterInput):
    """Sort keys for customer search and batch lookups."""

    first_name: SortDirection | None = None
    last_name: SortDirection | None = None
    birth_date: SortDirection | None = None
    employee_email: SortDirection | None = None
    payment: PaymentSorterInput | None = None
    create_date: SortDirection | None = None
