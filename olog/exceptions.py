"""Exception hierarchy for olog."""

from http import HTTPStatus
from pathlib import Path


class OlogError(Exception):
    """Base exception for all olog errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all olog errors with a single
    except clause. ``status`` is the HTTP-style status a front-end
    should answer with.
    """

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR


# Configuration Errors
class ConfigError(OlogError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Request Errors
class InvalidParameterError(OlogError):
    """A search parameter is malformed or incomplete."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid parameter '{key}': {reason}")


# Database Errors
class DatabaseError(OlogError):
    """Database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Failed to connect to database."""

    pass


class BackingStoreError(DatabaseError):
    """A store access failed while answering a request.

    Wraps the underlying driver exception (available as ``__cause__``).
    """

    def __init__(self, message: str, status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR) -> None:
        self.status = status
        super().__init__(message)


class SearchTimeoutError(BackingStoreError):
    """A search did not finish before its deadline."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Search exceeded its deadline of {timeout:g}s",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
        )


# Entity Not Found Errors
class NotFoundError(OlogError):
    """Requested entity not found."""

    status = HTTPStatus.NOT_FOUND


class LogNotFoundError(NotFoundError):
    """Log doesn't exist."""

    def __init__(self, log_id: int) -> None:
        self.log_id = log_id
        super().__init__(f"Log not found: {log_id}")


class LogbookNotFoundError(NotFoundError):
    """Logbook doesn't exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A logbook named '{name}' does not exist")


class TagNotFoundError(NotFoundError):
    """Tag doesn't exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A tag named '{name}' does not exist")


class DuplicateNameError(OlogError):
    """A logbook or tag with this name already exists."""

    status = HTTPStatus.CONFLICT

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"A {kind} named '{name}' already exists")
