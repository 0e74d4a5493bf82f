"""Base models for records decoded from the document store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Stored (sub-)document, read with camelCase keys.

    Unknown keys (``_id``, fields not exposed to callers) are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class RecordModel(DocumentModel):
    """Top-level record carrying the unique identifier."""

    identifier: str = Field(min_length=1, description="Unique record identifier (UUID)")


class StatusObject(DocumentModel):
    """Lifecycle markers shared by customers, employees and teams."""

    creation: str | None = Field(default=None, description="Creation status")
    deletion: str | None = Field(default=None, description="Deletion status (DELETED when removed)")


__all__ = ["DocumentModel", "RecordModel", "StatusObject"]
