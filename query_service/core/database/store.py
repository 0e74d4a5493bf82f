"""Document store interface.

The engine talks to the database through one narrow call: run an
aggregation pipeline against a collection and return the documents.
Connection pooling, retries and health checks belong to the driver.

``MongoDocumentStore`` adapts an async MongoDB database handle (PyMongo's
``AsyncMongoClient`` or Motor). Any object supporting ``database[collection]``
with an ``aggregate(pipeline, maxTimeMS=...)`` method returning an async
cursor with ``to_list`` works.

Usage:
    store = create_document_store(get_db_settings())
    documents = await store.aggregate("customers", pipeline)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pymongo import AsyncMongoClient
from pymongo.errors import (
    ConnectionFailure,
    ExecutionTimeout,
    NetworkTimeout,
    ServerSelectionTimeoutError,
    WTimeoutError,
)

from query_service.core.exceptions import AppException, DatabaseException

if TYPE_CHECKING:
    from query_service.core.settings.database import DocumentStoreSettings

logger = logging.getLogger(__name__)

Document = dict[str, Any]
Pipeline = list[dict[str, Any]]

# NetworkTimeout and ServerSelectionTimeoutError subclass ConnectionFailure,
# so timeouts are checked first.
_TIMEOUT_ERRORS = (
    TimeoutError,
    ExecutionTimeout,
    NetworkTimeout,
    ServerSelectionTimeoutError,
    WTimeoutError,
)
_CONNECTION_ERRORS = (ConnectionError, ConnectionFailure)


@runtime_checkable
class DocumentStore(Protocol):
    """Async aggregation executor over named collections."""

    async def aggregate(self, collection: str, pipeline: Pipeline) -> list[Document]:
        """Run ``pipeline`` against ``collection`` and return every document."""
        ...


class MongoDocumentStore:
    """DocumentStore backed by an async MongoDB database handle.

    Attributes:
        database: Async database handle (``client[database_name]``).
        max_time_ms: Server-side limit passed as ``maxTimeMS``.
    """

    def __init__(self, database: Any, max_time_ms: int | None = None) -> None:
        self.database = database
        self.max_time_ms = max_time_ms

    async def aggregate(self, collection: str, pipeline: Pipeline) -> list[Document]:
        options: dict[str, Any] = {}
        if self.max_time_ms is not None:
            options["maxTimeMS"] = self.max_time_ms
        cursor = self.database[collection].aggregate(pipeline, **options)
        # Motor returns the cursor directly, PyMongo async returns an awaitable
        if asyncio.iscoroutine(cursor):
            cursor = await cursor
        return await cursor.to_list(None)


def create_document_store(settings: DocumentStoreSettings) -> MongoDocumentStore:
    """Build a MongoDocumentStore from connection settings.

    The client connects lazily; closing it is the caller's job
    (``await store.database.client.close()``).
    """
    client: AsyncMongoClient[Document] = AsyncMongoClient(
        settings.uri.get_secret_value(), connect=False
    )
    logger.info(
        "Document store configured",
        extra={"database": settings.database, "max_time_ms": settings.operation_timeout_ms},
    )
    return MongoDocumentStore(client[settings.database], settings.operation_timeout_ms)


def map_store_error(exc: BaseException) -> AppException:
    """Convert a store or driver failure into an application exception.

    Application exceptions pass through unchanged. Everything else
    becomes a DatabaseException with a stable message and the original
    error kept as its cause.
    """
    if isinstance(exc, AppException):
        return exc

    if isinstance(exc, _TIMEOUT_ERRORS):
        detail = "Database query timed out"
    elif isinstance(exc, _CONNECTION_ERRORS):
        detail = "Database connection failed"
    else:
        detail = "Database query failed"

    logger.debug("Store error mapped: %s -> %s", type(exc).__name__, detail)
    return DatabaseException(detail=detail, cause=exc)


__all__ = [
    "Document",
    "DocumentStore",
    "MongoDocumentStore",
    "Pipeline",
    "create_document_store",
    "map_store_error",
]
