"""Customer entity configuration."""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.filters import FilterNode
from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import CustomerFilterInput, CustomerRecord, CustomerSorterInput


def convert_customer_filter(filter_input: CustomerFilterInput) -> FilterNode | None:
    return filter_input.to_filter()


def convert_customer_sorter(sorters: Sequence[CustomerSorterInput]) -> list[SortField]:
    return sort_fields_from(sorters)


CUSTOMER_CONFIG = EntityConfig(
    name="customer",
    collection_name="customers",
    deletion_field="status.deletion",
    deletion_sentinel="DELETED",
    filter_converter=convert_customer_filter,
    sorter_converter=convert_customer_sorter,
    model=CustomerRecord,
    filter_input=CustomerFilterInput,
    sorter_input=CustomerSorterInput,
)
