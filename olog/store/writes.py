"""Create and update logs, logbooks and tags."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from olog.exceptions import (
    DuplicateNameError,
    LogbookNotFoundError,
    LogNotFoundError,
    TagNotFoundError,
)
from olog.store.models import Log, Logbook, LogProperty, Tag, utcnow
from olog.store.records import log_summary
from olog.store.session import store_access

logger = logging.getLogger(__name__)


def _find_logbook(session: Session, name: str) -> Logbook | None:
    stmt = select(Logbook).where(func.lower(Logbook.name) == name.lower())
    return session.execute(stmt).scalar_one_or_none()


def _find_tag(session: Session, name: str) -> Tag | None:
    stmt = select(Tag).where(func.lower(Tag.name) == name.lower())
    return session.execute(stmt).scalar_one_or_none()


def get_logbook(session: Session, name: str) -> Logbook:
    """Get a logbook by name (case-insensitive).

    Raises:
        LogbookNotFoundError: If no such logbook exists.
    """
    with store_access(f"looking up logbook '{name}'"):
        logbook = _find_logbook(session, name)
    if logbook is None:
        raise LogbookNotFoundError(name)
    return logbook


def get_tag(session: Session, name: str) -> Tag:
    """Get a tag by name (case-insensitive).

    Raises:
        TagNotFoundError: If no such tag exists.
    """
    with store_access(f"looking up tag '{name}'"):
        tag = _find_tag(session, name)
    if tag is None:
        raise TagNotFoundError(name)
    return tag


def _get_log(session: Session, log_id: int) -> Log:
    with store_access(f"looking up log {log_id}"):
        log = session.get(Log, log_id)
    if log is None:
        raise LogNotFoundError(log_id)
    return log


def create_logbook(session: Session, name: str, owner: str | None = None) -> Logbook:
    """Create a new logbook.

    Raises:
        DuplicateNameError: If a logbook with this name exists.
    """
    with store_access(f"creating logbook '{name}'"):
        if _find_logbook(session, name) is not None:
            raise DuplicateNameError("logbook", name)
        logbook = Logbook(name=name, owner=owner)
        session.add(logbook)
        session.flush()
    logger.info("Created logbook '%s'", name)
    return logbook


def create_tag(session: Session, name: str, owner: str | None = None) -> Tag:
    """Create a new tag.

    Raises:
        DuplicateNameError: If a tag with this name exists.
    """
    with store_access(f"creating tag '{name}'"):
        if _find_tag(session, name) is not None:
            raise DuplicateNameError("tag", name)
        tag = Tag(name=name, owner=owner)
        session.add(tag)
        session.flush()
    logger.info("Created tag '%s'", name)
    return tag


def create_log(
    session: Session,
    subject: str,
    owner: str,
    *,
    description: str | None = None,
    logbooks: Iterable[str] = (),
    tags: Iterable[str] = (),
    properties: Mapping[str, str] | None = None,
    created_at: datetime | None = None,
) -> Log:
    """Create a log entry.

    Args:
        session: Active store session.
        subject: Log subject line.
        owner: Owner of the entry.
        description: Free-text body.
        logbooks: Names of existing logbooks to file the log under.
        tags: Names of existing tags to attach.
        properties: Property name to value.
        created_at: Creation time (naive UTC); defaults to now.

    Returns:
        The new Log, flushed so it has an id.

    Raises:
        LogbookNotFoundError: If a named logbook doesn't exist.
        TagNotFoundError: If a named tag doesn't exist.
    """
    # Resolve names before building the log so a missing one leaves nothing behind
    log_logbooks = list(dict.fromkeys(get_logbook(session, name) for name in logbooks))
    log_tags = list(dict.fromkeys(get_tag(session, name) for name in tags))

    log = Log(
        subject=subject,
        owner=owner,
        description=description,
        created_at=created_at or utcnow(),
        logbooks=log_logbooks,
        tags=log_tags,
        properties=[
            LogProperty(name=name.lower(), value=value)
            for name, value in (properties or {}).items()
        ],
    )

    with store_access(f"creating log '{subject}'"):
        session.add(log)
        session.flush()
    logger.info("Created log %d: %s", log.id, log_summary(log))
    return log


def add_tag_to_log(session: Session, tag_name: str, log_id: int) -> Log:
    """Attach an existing tag to a single log.

    Raises:
        TagNotFoundError: If the tag doesn't exist.
        LogNotFoundError: If the log doesn't exist.
    """
    tag = get_tag(session, tag_name)
    log = _get_log(session, log_id)
    if tag not in log.tags:
        log.tags.append(tag)
        with store_access(f"attaching tag '{tag_name}' to log {log_id}"):
            session.flush()
    return log


def update_logbook(
    session: Session,
    name: str,
    *,
    new_name: str | None = None,
    owner: str | None = None,
    log_ids: Iterable[int] = (),
) -> Logbook:
    """Rename a logbook, change its owner, and/or file logs under it.

    Raises:
        LogbookNotFoundError: If the logbook doesn't exist.
        LogNotFoundError: If one of ``log_ids`` doesn't exist.
        DuplicateNameError: If ``new_name`` is taken by another logbook.
    """
    logbook = get_logbook(session, name)

    if new_name is not None and new_name != logbook.name:
        with store_access(f"renaming logbook '{name}'"):
            other = _find_logbook(session, new_name)
        if other is not None and other.id != logbook.id:
            raise DuplicateNameError("logbook", new_name)
        logbook.name = new_name
    if owner is not None:
        logbook.owner = owner

    for log_id in log_ids:
        log = _get_log(session, log_id)
        if logbook not in log.logbooks:
            log.logbooks.append(logbook)

    with store_access(f"updating logbook '{name}'"):
        session.flush()
    return logbook


def list_logbooks(session: Session) -> list[Logbook]:
    """All logbooks, by name."""
    with store_access("listing logbooks"):
        return list(session.scalars(select(Logbook).order_by(Logbook.name)))


def list_tags(session: Session) -> list[Tag]:
    """All tags, by name."""
    with store_access("listing tags"):
        return list(session.scalars(select(Tag).order_by(Tag.name)))
