"""Unit tests for error status hints and CLI exit codes."""

from __future__ import annotations

from http import HTTPStatus

from olog.commands._common import (
    EXIT_BAD_REQUEST,
    EXIT_CONFLICT,
    EXIT_NOT_FOUND,
    EXIT_STORE_ERROR,
    exit_code_for,
)
from olog.exceptions import (
    BackingStoreError,
    DatabaseConnectionError,
    DuplicateNameError,
    InvalidParameterError,
    LogbookNotFoundError,
    LogNotFoundError,
    SearchTimeoutError,
    TagNotFoundError,
)


def test_invalid_parameter_is_bad_request() -> None:
    exc = InvalidParameterError("page", "x", "must be an integer")
    assert exc.status == HTTPStatus.BAD_REQUEST
    assert str(exc) == "Invalid parameter 'page': must be an integer"
    assert exit_code_for(exc) == EXIT_BAD_REQUEST


def test_not_found_errors() -> None:
    for exc in (LogNotFoundError(3), LogbookNotFoundError("ops"), TagNotFoundError("x")):
        assert exc.status == HTTPStatus.NOT_FOUND
        assert exit_code_for(exc) == EXIT_NOT_FOUND


def test_duplicate_name_is_conflict() -> None:
    exc = DuplicateNameError("tag", "urgent")
    assert exc.status == HTTPStatus.CONFLICT
    assert exit_code_for(exc) == EXIT_CONFLICT


def test_store_errors() -> None:
    for exc in (BackingStoreError("boom"), DatabaseConnectionError("no db")):
        assert exc.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert exit_code_for(exc) == EXIT_STORE_ERROR


def test_timeout_is_a_store_error() -> None:
    exc = SearchTimeoutError(2.5)
    assert isinstance(exc, BackingStoreError)
    assert exc.status == HTTPStatus.SERVICE_UNAVAILABLE
    assert "2.5s" in str(exc)
    assert exit_code_for(exc) == EXIT_STORE_ERROR
