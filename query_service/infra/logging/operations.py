"""Operation logging context managers.

Provides reusable logging patterns for store queries: entry/exit logging
with duration, structured extra fields and slow-query detection.

Example:
    from query_service.infra.logging.operations import query_context

    async with query_context("customerSearch", threshold=2.0, entity="customer") as ctx:
        page = await repository.search(...)
        ctx.set_result(count=len(page.items))
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class OperationContext:
    """Helper class for operation context managers.

    Allows setting additional result data during the operation.
    """

    __slots__ = ("_extra",)

    def __init__(self) -> None:
        self._extra: dict[str, Any] = {}

    def set_result(self, **kwargs: Any) -> None:
        """Add result data to be logged on completion."""
        self._extra.update(kwargs)


@asynccontextmanager
async def query_context(
    query_name: str,
    *,
    threshold: float,
    logger: logging.Logger | None = None,
    **context_data: Any,
) -> AsyncIterator[OperationContext]:
    """Time a store query and log it with slow-query detection.

    Successful queries log at INFO; queries that took longer than
    ``threshold`` seconds log at WARNING with ``slow_query=True``.
    Failures log at ERROR and re-raise.

    Args:
        query_name: Query name, e.g. ``customerSearch`` or ``customer``.
        threshold: Slow query threshold in seconds.
        logger: Logger to use (default: module logger).
        **context_data: Additional context to include in logs.

    Yields:
        OperationContext for adding result data.
    """
    log = logger or logging.getLogger(__name__)
    ctx = OperationContext()
    start_time = time.perf_counter()
    extra: dict[str, Any] = {"operation": query_name, **context_data}

    try:
        yield ctx
    except Exception as exc:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log.error(
            "%s failed: %s",
            query_name,
            exc,
            extra={
                **extra,
                **ctx._extra,
                "duration_ms": duration_ms,
                "success": False,
                "error_type": type(exc).__name__,
            },
        )
        raise

    elapsed = time.perf_counter() - start_time
    duration_ms = round(elapsed * 1000, 2)
    if elapsed > threshold:
        log.warning(
            "Slow query detected: %s took %.2fms (threshold %.2fms)",
            query_name,
            duration_ms,
            threshold * 1000,
            extra={
                **extra,
                **ctx._extra,
                "duration_ms": duration_ms,
                "threshold_ms": round(threshold * 1000, 2),
                "slow_query": True,
                "success": True,
            },
        )
    else:
        log.info(
            "%s executed in %.2fms",
            query_name,
            duration_ms,
            extra={**extra, **ctx._extra, "duration_ms": duration_ms, "success": True},
        )
