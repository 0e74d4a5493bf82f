"""Base service class for request-facing operations."""

from __future__ import annotations

import logging

from query_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class CustomerLookup(BaseService):
            async def get(self, identifier: str) -> CustomerRecord | None:
                self.logger.info("Fetching customer", extra={"identifier": identifier})
                return await self.repository.get(identifier)
    """

    def __init__(self) -> None:
        """Initialize base service with loggers."""
        class_name = self.__class__.__name__
        # Standard logger for INFO/WARNING/ERROR
        self.logger = logging.getLogger(class_name)
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(class_name)
