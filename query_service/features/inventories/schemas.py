"""Pydantic schemas for the inventories feature."""

from __future__ import annotations

from query_service.core.database.sorting import SortDirection
from query_service.features.inputs import EntitySorterInput
from query_service.features.records import RecordModel


class InventoryRecord(RecordModel):
    """Inventory as returned to callers."""

    customer_id: str | None = None
    action_indicator: str | None = None


class InventorySorterInput(EntitySorterInput):
    customer_id: SortDirection | None = None
