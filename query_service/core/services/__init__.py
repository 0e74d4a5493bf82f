"""Core services module."""

from query_service.core.services.base import BaseService

__all__ = ["BaseService"]
