"""Inventories feature: inventory records by customer."""

from __future__ import annotations

from .config import INVENTORY_CONFIG
from .schemas import InventoryRecord, InventorySorterInput

__all__ = ["INVENTORY_CONFIG", "InventoryRecord", "InventorySorterInput"]
