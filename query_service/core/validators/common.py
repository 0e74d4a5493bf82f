"""Common input validators.

Guards shared by the search and batch lookup paths. All of them run
before any store call and raise InvalidInputException on violation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, TypeVar

from query_service.core.exceptions import InvalidInputException

if TYPE_CHECKING:
    from collections.abc import Callable

    from query_service.core.pagination.schemas import PageWindow

T = TypeVar("T")

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def optional_validator(
    validate_fn: Callable[[T], T],
) -> Callable[[T | None], T | None]:
    """Wrap a validator to handle None values.

    Args:
        validate_fn: Validator function that handles non-None values.

    Returns:
        Wrapped validator that passes None through unchanged.

    Example:
        validate_identifier_optional = optional_validator(validate_identifier)
    """

    def wrapper(value: T | None) -> T | None:
        if value is None:
            return None
        return validate_fn(value)

    return wrapper


def validate_identifier(value: str) -> str:
    """Check that ``value`` has the canonical UUID shape (any case).

    Raises:
        InvalidInputException: Naming the offending value.
    """
    if not isinstance(value, str) or not UUID_PATTERN.match(value):
        raise InvalidInputException(
            detail=f"invalid UUID format: {value}",
            extra={"identifier": str(value)},
        )
    return value


validate_identifier_optional = optional_validator(validate_identifier)


def validate_identifiers(values: Sequence[str], max_batch_size: int) -> list[str]:
    """Validate a batch of identifiers.

    The batch ceiling is checked first, then every identifier.

    Raises:
        InvalidInputException: If the batch is too large or any identifier
            is malformed.
    """
    if len(values) > max_batch_size:
        raise InvalidInputException(
            detail=(
                f"batch size exceeds maximum: requested {len(values)}, "
                f"maximum {max_batch_size}"
            ),
            extra={"requested": len(values), "maximum": max_batch_size},
        )
    return [validate_identifier(value) for value in values]


def dedupe_identifiers(values: Iterable[str]) -> list[str]:
    """Drop repeated identifiers, keeping first occurrences."""
    return list(dict.fromkeys(values))


def validate_page_window(window: PageWindow, max_page_size: int) -> None:
    """Validate a pagination window.

    Rules:
        - ``first`` and ``last`` are mutually exclusive
        - ``after`` only pages forward, ``before`` only pages backward,
          and the two cursors cannot be combined
        - ``first``/``last`` are non-negative and at most ``max_page_size``

    Raises:
        InvalidInputException: On the first rule violated.
    """
    if window.first is not None and window.last is not None:
        raise InvalidInputException(
            detail="cannot specify both 'first' and 'last'",
            extra={"first": window.first, "last": window.last},
        )
    if window.after is not None and window.before is not None:
        raise InvalidInputException(detail="cannot specify both 'after' and 'before'")
    if window.after is not None and window.last is not None:
        raise InvalidInputException(detail="cannot use 'after' with 'last'")
    if window.before is not None and window.first is not None:
        raise InvalidInputException(detail="cannot use 'before' with 'first'")

    for name, value in (("first", window.first), ("last", window.last)):
        if value is None:
            continue
        if value < 0:
            raise InvalidInputException(
                detail=f"'{name}' must be non-negative, got {value}",
                extra={name: value},
            )
        if value > max_page_size:
            raise InvalidInputException(
                detail=(
                    f"'{name}' exceeds maximum page size: requested {value}, "
                    f"maximum {max_page_size}"
                ),
                extra={"requested": value, "maximum": max_page_size},
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
