"""Customers feature: searchable customer records."""

from __future__ import annotations

from .config import CUSTOMER_CONFIG, convert_customer_filter, convert_customer_sorter
from .schemas import (
    CustomerFilterInput,
    CustomerRecord,
    CustomerSorterInput,
    PaymentInfo,
    PaymentSorterInput,
)

__all__ = [
    "CUSTOMER_CONFIG",
    "CustomerFilterInput",
    "CustomerRecord",
    "CustomerSorterInput",
    "PaymentInfo",
    "PaymentSorterInput",
    "convert_customer_filter",
    "convert_customer_sorter",
]
