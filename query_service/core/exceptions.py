"""Custom exception classes for the query service."""

from __future__ import annotations

from typing import Any

# Stable error codes surfaced to callers
ERR_CODE_INVALID_INPUT = "INVALID_INPUT"
ERR_CODE_NOT_FOUND = "NOT_FOUND"
ERR_CODE_DATABASE_ERROR = "DATABASE_ERROR"
ERR_CODE_INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details, plus a stable ``code`` that
    transports (GraphQL extensions, JSON error bodies) expose verbatim.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        code: Stable machine-readable error code (e.g. ``INVALID_INPUT``).
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.
        cause: Underlying exception kept for diagnostics, never shown to callers.

    Example:
        raise AppException(
            status_code=400,
            detail="invalid UUID format: abc",
            code="INVALID_INPUT",
            extra={"identifier": "abc"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = ERR_CODE_INTERNAL_SERVER_ERROR,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            code: Stable error code.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
            cause: Underlying exception, if any.
        """
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        self.cause = cause
        super().__init__(detail)

    @property
    def extensions(self) -> dict[str, Any]:
        """Error extensions suitable for a GraphQL error response."""
        return {"code": self.code}

    def to_problem_detail(self) -> dict[str, Any]:
        """Serialize to an RFC 7807 problem detail body.

        The underlying cause is deliberately left out.
        """
        body: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
            "code": self.code,
        }
        if self.extra:
            body.update(self.extra)
        return body

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code.

        Args:
            status_code: HTTP status code.

        Returns:
            Human-readable title for the status code.
        """
        titles = {
            400: "Bad Request",
            404: "Not Found",
            500: "Internal Server Error",
            503: "Service Unavailable",
            504: "Gateway Timeout",
        }
        return titles.get(status_code, "Error")


class InvalidInputException(AppException):
    """Exception raised for malformed client input.

    Covers malformed identifiers, undecodable cursors, conflicting
    pagination parameters and oversized batches. Always raised before
    any store call and never retried.

    Example:
        raise InvalidInputException(
            detail="invalid UUID format: not-a-uuid",
            extra={"identifier": "not-a-uuid"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-input",
        extra: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize invalid input exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
            cause: Underlying parse error, if any.
        """
        super().__init__(
            status_code=400,
            detail=detail,
            code=ERR_CODE_INVALID_INPUT,
            type=type,
            title="Invalid Input",
            extra=extra,
            cause=cause,
        )


class NotFoundException(AppException):
    """Exception raised when a single-key lookup finds nothing.

    Search and batch lookups never raise this; an empty result is a
    normal outcome for them.

    Example:
        raise NotFoundException(
            detail="customer not found with identifier='...'",
            extra={"entity": "customer", "identifier": "..."},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not found exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=404,
            detail=detail,
            code=ERR_CODE_NOT_FOUND,
            type=type,
            title="Not Found",
            extra=extra,
        )


class DatabaseException(AppException):
    """Exception raised when the document store fails.

    Store execution failures, result-decoding failures and deadline
    expiry all map here. The message is stable; the original error is
    attached as ``cause`` (and chained) for logging.

    Example:
        try:
            documents = await store.aggregate("customers", pipeline)
        except PyMongoError as exc:
            raise DatabaseException("Database query failed", cause=exc) from exc
    """

    def __init__(
        self,
        detail: str = "Database operation failed",
        type: str = "database-error",
        extra: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize database exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
            cause: Underlying store exception.
        """
        super().__init__(
            status_code=503,
            detail=detail,
            code=ERR_CODE_DATABASE_ERROR,
            type=type,
            title="Database Error",
            extra=extra,
            cause=cause,
        )


class InternalServerException(AppException):
    """Exception raised for unanticipated failures (a bug signal).

    Example:
        raise InternalServerException(detail="Unknown entity: widget")
    """

    def __init__(
        self,
        detail: str,
        type: str = "internal-error",
        extra: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize internal server exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
            cause: Underlying exception, if any.
        """
        super().__init__(
            status_code=500,
            detail=detail,
            code=ERR_CODE_INTERNAL_SERVER_ERROR,
            type=type,
            title="Internal Server Error",
            extra=extra,
            cause=cause,
        )


def to_app_exception(exc: BaseException) -> AppException:
    """Normalize any exception into an ``AppException``.

    Application exceptions pass through unchanged; anything else is
    treated as an internal error with the original kept as the cause.
    """
    if isinstance(exc, AppException):
        return exc
    return InternalServerException(detail="An unexpected error occurred", cause=exc)


# Aliases for convenience
InvalidInputError = InvalidInputException
NotFoundError = NotFoundException
DatabaseError = DatabaseException


__all__ = [
    "ERR_CODE_DATABASE_ERROR",
    "ERR_CODE_INTERNAL_SERVER_ERROR",
    "ERR_CODE_INVALID_INPUT",
    "ERR_CODE_NOT_FOUND",
    "AppException",
    "DatabaseError",
    "DatabaseException",
    "InternalServerException",
    "InvalidInputError",
    "InvalidInputException",
    "NotFoundError",
    "NotFoundException",
    "to_app_exception",
]
