"""Reusable input validators.

Usage:
    from query_service.core.validators import validate_identifiers

    ids = validate_identifiers(ids, settings.max_batch_size)

Pydantic inputs reuse the same checks:
    @field_validator("eq")
    @classmethod
    def check_eq(cls, v: str | None) -> str | None:
        return validate_identifier_optional(v)
"""

from __future__ import annotations

from query_service.core.validators.common import (
    UUID_PATTERN,
    dedupe_identifiers,
    optional_validator,
    validate_identifier,
    validate_identifier_optional,
    validate_identifiers,
    validate_page_window,
)

__all__ = [
    "UUID_PATTERN",
    "dedupe_identifiers",
    "optional_validator",
    "validate_identifier",
    "validate_identifier_optional",
    "validate_identifiers",
    "validate_page_window",
]
