"""Reference portfolios feature: reference portfolio records by customer."""

from __future__ import annotations

from .config import REFERENCE_PORTFOLIO_CONFIG
from .schemas import (
    ReferencePortfolioFilterInput,
    ReferencePortfolioRecord,
    ReferencePortfolioSorterInput,
)

__all__ = [
    "REFERENCE_PORTFOLIO_CONFIG",
    "ReferencePortfolioFilterInput",
    "ReferencePortfolioRecord",
    "ReferencePortfolioSorterInput",
]
