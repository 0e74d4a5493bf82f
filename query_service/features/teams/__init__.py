"""Teams feature: searchable team records."""

from __future__ import annotations

from .config import TEAM_CONFIG
from .schemas import (
    TeamFilterInput,
    TeamRecord,
    TeamSorterInput,
    TeamStatusFilterInput,
)

__all__ = [
    "TEAM_CONFIG",
    "TeamFilterInput",
    "TeamRecord",
    "TeamSorterInput",
    "TeamStatusFilterInput",
]
