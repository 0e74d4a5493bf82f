"""Registry of every searchable entity."""

from __future__ import annotations

from functools import lru_cache

from query_service.core.database.registry import EntityRegistry
from query_service.features.customers import CUSTOMER_CONFIG
from query_service.features.employees import EMPLOYEE_CONFIG
from query_service.features.execution_plans import EXECUTION_PLAN_CONFIG
from query_service.features.inventories import INVENTORY_CONFIG
from query_service.features.reference_portfolios import REFERENCE_PORTFOLIO_CONFIG
from query_service.features.teams import TEAM_CONFIG


@lru_cache(maxsize=1)
def build_entity_registry() -> EntityRegistry:
    """Get the shared registry of all entity configurations.

    Built on first use and reused for the lifetime of the process.
    """
    return EntityRegistry(
        [
            CUSTOMER_CONFIG,
            EMPLOYEE_CONFIG,
            TEAM_CONFIG,
            INVENTORY_CONFIG,
            EXECUTION_PLAN_CONFIG,
            REFERENCE_PORTFOLIO_CONFIG,
        ]
    )


__all__ = ["build_entity_registry"]
