"""Helpers shared by olog commands."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from http import HTTPStatus
from typing import TYPE_CHECKING

from olog.exceptions import OlogError
from olog.store.session import get_store_session
from olog.utils.output import error

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from olog.cli import Context

EXIT_SUCCESS = 0
EXIT_BAD_REQUEST = 1
EXIT_STORE_ERROR = 2
EXIT_NO_CONFIG = 3
EXIT_NOT_FOUND = 4
EXIT_CONFLICT = 5

_STATUS_EXIT_CODES: dict[HTTPStatus, int] = {
    HTTPStatus.BAD_REQUEST: EXIT_BAD_REQUEST,
    HTTPStatus.NOT_FOUND: EXIT_NOT_FOUND,
    HTTPStatus.CONFLICT: EXIT_CONFLICT,
}


def exit_code_for(exc: OlogError) -> int:
    """Map an error's status hint to a process exit code."""
    return _STATUS_EXIT_CODES.get(exc.status, EXIT_STORE_ERROR)


@contextmanager
def store_session(ctx: Context) -> Generator[Session, None, None]:
    """Open the configured store for one command.

    olog errors are reported and turned into the matching exit code.
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_NO_CONFIG)

    try:
        with get_store_session(config.db_path) as session:
            yield session
    except OlogError as e:
        error(str(e))
        raise SystemExit(exit_code_for(e))


def parse_assignments(values: tuple[str, ...], option: str) -> dict[str, list[str]]:
    """Parse repeated ``NAME=VALUE`` options into a multimap."""
    result: dict[str, list[str]] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            error(f"Invalid {option} '{item}'", hint="Use NAME=VALUE")
            raise SystemExit(EXIT_BAD_REQUEST)
        result.setdefault(name.strip(), []).append(value)
    return result
