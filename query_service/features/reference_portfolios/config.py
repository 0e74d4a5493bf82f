"""Reference portfolio entity configuration."""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.filters import FilterNode
from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import (
    ReferencePortfolioFilterInput,
    ReferencePortfolioRecord,
    ReferencePortfolioSorterInput,
)


def convert_reference_portfolio_filter(
    filter_input: ReferencePortfolioFilterInput,
) -> FilterNode | None:
    return filter_input.to_filter()


def convert_reference_portfolio_sorter(
    sorters: Sequence[ReferencePortfolioSorterInput],
) -> list[SortField]:
    return sort_fields_from(sorters)


REFERENCE_PORTFOLIO_CONFIG = EntityConfig(
    name="referencePortfolio",
    collection_name="referencePortfolios",
    deletion_field="actionIndicator",
    deletion_sentinel="DELETE",
    filter_converter=convert_reference_portfolio_filter,
    sorter_converter=convert_reference_portfolio_sorter,
    model=ReferencePortfolioRecord,
    filter_input=ReferencePortfolioFilterInput,
    sorter_input=ReferencePortfolioSorterInput,
)
