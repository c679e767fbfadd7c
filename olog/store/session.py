"""Store database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from pathlib import Path

import sqlalchemy.engine
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from olog.exceptions import BackingStoreError, DatabaseConnectionError
from olog.store.models import StoreBase

DEFAULT_DB_NAME = "olog.db"

log = logging.getLogger(__name__)


def get_default_db_path() -> Path:
    """Get the default store database path."""
    return Path.home() / ".local" / "share" / "olog" / DEFAULT_DB_NAME


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_connection(dbapi_connection, connection_record) -> None:
    # SQLite's builtin lower() folds ASCII only; name lookups and ILIKE
    # must agree with str.lower().
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_store_engine(db_path: Path | str) -> sqlalchemy.engine.Engine:
    """Create SQLAlchemy engine for the store database.

    Args:
        db_path: Path to the SQLite file, or ``":memory:"``.

    Returns:
        SQLAlchemy engine with the schema created.

    Raises:
        DatabaseConnectionError: If the database cannot be opened.
    """
    if str(db_path) == ":memory:":
        url = "sqlite://"
    else:
        db_path = Path(db_path).expanduser().resolve()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{db_path}"

    engine = create_engine(
        url,
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )
    event.listen(engine, "connect", _configure_connection)

    try:
        StoreBase.metadata.create_all(engine)
    except SQLAlchemyError as e:
        raise DatabaseConnectionError(f"Failed to open store at {db_path}: {e}") from e
    log.info("Store schema ready: %s", url)
    return engine


@contextmanager
def get_store_session(
    db_path: Path | str | None = None,
    *,
    engine: sqlalchemy.engine.Engine | None = None,
) -> Generator[Session, None, None]:
    """Create a session for the store database.

    The session lives for exactly one request: it commits on success,
    rolls back on error and is closed on every exit path.

    Args:
        db_path: Path to the store database (default location if None).
        engine: Existing engine to bind to instead of opening ``db_path``.

    Yields:
        SQLAlchemy Session for the store database.
    """
    if engine is None:
        engine = get_store_engine(db_path if db_path is not None else get_default_db_path())

    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def store_access(action: str) -> Iterator[None]:
    """Wrap driver failures raised while ``action`` runs in BackingStoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        log.error("Store failure while %s: %s", action, e)
        raise BackingStoreError(f"Store failure while {action}: {e}") from e
