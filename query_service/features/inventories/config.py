"""Inventory entity configuration.

Inventories are only looked up by key or listed; they accept no filter.
"""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import InventoryRecord, InventorySorterInput


def convert_inventory_sorter(sorters: Sequence[InventorySorterInput]) -> list[SortField]:
    return sort_fields_from(sorters)


INVENTORY_CONFIG = EntityConfig(
    name="inventory",
    collection_name="inventories",
    deletion_field="actionIndicator",
    deletion_sentinel="DELETE",
    sorter_converter=convert_inventory_sorter,
    model=InventoryRecord,
    sorter_input=InventorySorterInput,
)
