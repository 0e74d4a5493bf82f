"""Tests for core exceptions."""

from query_service.core import exceptions as exc


def test_app_exception_defaults_title() -> None:
    error = exc.AppException(status_code=400, detail="bad")
    assert error.title == "Bad Request"
    assert error.extra == {}
    assert error.code == "INTERNAL_SERVER_ERROR"


def test_invalid_input_exception_fields() -> None:
    error = exc.InvalidInputException(detail="invalid UUID format: x", extra={"identifier": "x"})
    assert error.status_code == 400
    assert error.code == "INVALID_INPUT"
    assert error.type == "invalid-input"
    assert str(error) == "invalid UUID format: x"


def test_not_found_exception_fields() -> None:
    error = exc.NotFoundException(detail="missing")
    assert error.status_code == 404
    assert error.code == "NOT_FOUND"
    assert error.title == "Not Found"


def test_database_exception_keeps_cause() -> None:
    cause = TimeoutError("socket timed out")
    error = exc.DatabaseException(detail="Database query timed out", cause=cause)
    assert error.status_code == 503
    assert error.code == "DATABASE_ERROR"
    assert error.cause is cause
    assert "socket" not in error.detail


def test_database_exception_default_detail() -> None:
    assert exc.DatabaseException().detail == "Database operation failed"


def test_internal_server_exception_fields() -> None:
    error = exc.InternalServerException(detail="Unknown entity: widget")
    assert error.status_code == 500
    assert error.code == "INTERNAL_SERVER_ERROR"


def test_extensions_expose_code() -> None:
    error = exc.InvalidInputException(detail="bad")
    assert error.extensions == {"code": "INVALID_INPUT"}


def test_problem_detail_merges_extra_without_cause() -> None:
    error = exc.DatabaseException(
        detail="Database query failed",
        extra={"collection": "customers"},
        cause=RuntimeError("secret driver text"),
    )
    body = error.to_problem_detail()
    assert body["status"] == 503
    assert body["code"] == "DATABASE_ERROR"
    assert body["collection"] == "customers"
    assert "secret driver text" not in str(body)


def test_to_app_exception_wraps_unknown_errors() -> None:
    original = KeyError("boom")
    wrapped = exc.to_app_exception(original)
    assert isinstance(wrapped, exc.InternalServerException)
    assert wrapped.cause is original


def test_to_app_exception_passes_app_exceptions_through() -> None:
    error = exc.NotFoundException(detail="missing")
    assert exc.to_app_exception(error) is error


def test_aliases() -> None:
    assert exc.InvalidInputError is exc.InvalidInputException
    assert exc.NotFoundError is exc.NotFoundException
    assert exc.DatabaseError is exc.DatabaseException
