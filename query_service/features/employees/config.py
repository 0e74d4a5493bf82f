"""Employee entity configuration."""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.filters import FilterNode
from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import EmployeeFilterInput, EmployeeRecord, EmployeeSorterInput


def convert_employee_filter(filter_input: EmployeeFilterInput) -> FilterNode | None:
    return filter_input.to_filter()


def convert_employee_sorter(sorters: Sequence[EmployeeSorterInput]) -> list[SortField]:
    return sort_fields_from(sorters)


EMPLOYEE_CONFIG = EntityConfig(
    name="employee",
    collection_name="employees",
    deletion_field="status.deletion",
    deletion_sentinel="DELETED",
    filter_converter=convert_employee_filter,
    sorter_converter=convert_employee_sorter,
    model=EmployeeRecord,
    filter_input=EmployeeFilterInput,
    sorter_input=EmployeeSorterInput,
)
