"""Team entity configuration."""

from __future__ import annotations

from collections.abc import Sequence

from query_service.core.database.filters import FilterNode
from query_service.core.database.registry import EntityConfig
from query_service.core.database.sorting import SortField
from query_service.features.inputs import sort_fields_from

from .schemas import TeamFilterInput, TeamRecord, TeamSorterInput


def convert_team_filter(filter_input: TeamFilterInput) -> FilterNode | None:
    return filter_input.to_filter()


def convert_team_sorter(sorters: Sequence[TeamSorterInput]) -> list[SortField]:
    return sort_fields_from(sorters)


TEAM_CONFIG = EntityConfig(
    name="team",
    collection_name="teams",
    deletion_field="status.deletion",
    deletion_sentinel="DELETED",
    filter_converter=convert_team_filter,
    sorter_converter=convert_team_sorter,
    model=TeamRecord,
    filter_input=TeamFilterInput,
    sorter_input=TeamSorterInput,
)
