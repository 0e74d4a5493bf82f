"""Document store connection settings.

The connection lifecycle itself (pooling, retries, health) belongs to the
driver; these settings only describe where the data lives and how long a
single query may run.

Environment variables use MONGODB_ prefix.
Example: MONGODB_URI=mongodb://localhost:27017, MONGODB_OPERATION_TIMEOUT=10
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentStoreSettings(BaseSettings):
    """MongoDB-compatible document store configuration."""

    uri: SecretStr = Field(
        default=SecretStr("mongodb://localhost:27017"),
        description="Connection URI (may contain credentials)",
    )
    database: str = Field(
        default="air_dev",
        min_length=1,
        max_length=64,
        description="Database name holding the entity collections",
    )

    # Server-side limit passed to every aggregation as maxTimeMS
    operation_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=30.0,
        description="Per-operation timeout in seconds (1-30)",
    )

    # Client-side deadline applied around the single store call
    query_timeout: float | None = Field(
        default=None,
        gt=0,
        le=60.0,
        description="Request deadline in seconds (None defers to the store)",
    )

    model_config = SettingsConfigDict(
        env_prefix="MONGODB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @property
    def operation_timeout_ms(self) -> int:
        """Operation timeout in milliseconds (maxTimeMS)."""
        return int(self.operation_timeout * 1000)
