"""Pagination settings for search and batch lookups.

Having centralized pagination settings ensures every entity shares the
same ceilings and defaults.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_PAGE_SIZE=50, PAGINATION_MAX_BATCH_SIZE=100
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        max_batch_size: Maximum identifiers accepted by a batch-by-key lookup.
        default_page_size: Page size used when neither ``first`` nor ``last`` is given.
        max_page_size: Hard ceiling for ``first``/``last``.

    Example:
        settings = PaginationSettings()
        limit = window.limit(settings.default_page_size)
    """

    max_batch_size: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum identifiers per batch-by-key request",
    )
    default_page_size: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="Default page size when first/last not specified",
    )
    max_page_size: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="Maximum allowed first/last value (hard limit)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_default_within_max(self) -> PaginationSettings:
        """The default page size may not exceed the ceiling."""
        if self.default_page_size > self.max_page_size:
            msg = (
                f"default_page_size ({self.default_page_size}) cannot exceed "
                f"max_page_size ({self.max_page_size})"
            )
            raise ValueError(msg)
        return self
