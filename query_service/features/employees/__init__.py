"""Employees feature: searchable employee records."""

from __future__ import annotations

from .config import EMPLOYEE_CONFIG
from .schemas import EmployeeFilterInput, EmployeeRecord, EmployeeSorterInput

__all__ = [
    "EMPLOYEE_CONFIG",
    "EmployeeFilterInput",
    "EmployeeRecord",
    "EmployeeSorterInput",
]
