"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- Automatic context injection (request_id, entity, ...)
- Lazy evaluation for expensive debug output
- OpenTelemetry trace correlation
- Query timing with slow-query warnings

Basic usage:
    from query_service.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Processing request")  # Automatically includes request_id
"""

from query_service.infra.logging.config import configure_logging, setup_logging
from query_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    log_context,
    remove_from_log_context,
    set_log_context,
)
from query_service.infra.logging.formatters import JSONFormatter
from query_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger
from query_service.infra.logging.operations import (
    OperationContext,
    query_context,
)

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "OperationContext",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "log_context",
    "query_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
]
