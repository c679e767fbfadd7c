"""Run log searches against the store."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from olog.exceptions import LogNotFoundError, SearchTimeoutError
from olog.search.combinator import CriterionKind, combine
from olog.search.criteria import LOGBOOK_KEY, TAG_KEY, SearchCriteria, classify
from olog.search.executor import execute
from olog.search.resolvers import (
    ResolvedSet,
    resolve_log_ids,
    resolve_logbooks,
    resolve_properties,
    resolve_tags,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from olog.store.models import Log

logger = logging.getLogger(__name__)


class _Deadline:
    """Monotonic deadline checked between store round-trips."""

    def __init__(self, timeout: float | None) -> None:
        self.timeout = timeout
        self._expires = None if timeout is None else time.monotonic() + timeout

    def check(self) -> None:
        if self._expires is not None and time.monotonic() > self._expires:
            raise SearchTimeoutError(self.timeout)


def resolve_all(
    session: Session,
    criteria: SearchCriteria,
    *,
    timeout: float | None = None,
) -> ResolvedSet:
    """Resolve every set-valued criterion and combine the results.

    Resolution stops at the first kind that matches nothing, since the
    combined result is then empty regardless of the others.
    """
    deadline = _Deadline(timeout)
    resolvers = (
        (CriterionKind.TAG, lambda: resolve_tags(session, criteria.tag_exact)),
        (CriterionKind.PROPERTY, lambda: resolve_properties(session, criteria.properties)),
        (CriterionKind.TAG_PATTERN, lambda: resolve_tags(session, criteria.tag_pattern)),
        (CriterionKind.LOGBOOK, lambda: resolve_logbooks(session, criteria.logbook)),
    )

    resolved: dict[CriterionKind, ResolvedSet] = {}
    for kind, resolver in resolvers:
        deadline.check()
        result = resolver()
        resolved[kind] = result
        if result.is_empty:
            break

    direct_ids = None
    if criteria.direct_ids is not None:
        direct_ids = resolve_log_ids(criteria.direct_ids.ids)

    deadline.check()
    return combine(resolved, direct_ids)


def search(
    session: Session,
    criteria: SearchCriteria,
    *,
    timeout: float | None = None,
) -> list[Log]:
    """Find logs matching classified criteria.

    Args:
        session: Store session shared by every step of this query.
        criteria: Classified search criteria.
        timeout: Optional deadline in seconds for the whole search.

    Returns:
        Matching logs, newest first, paginated if requested.

    Raises:
        BackingStoreError: If the store fails.
        SearchTimeoutError: If the deadline passes.
    """
    started = time.monotonic()
    resolved = resolve_all(session, criteria, timeout=timeout)
    logs = execute(
        session,
        resolved,
        name_glob=criteria.name_glob,
        date_range=criteria.date_range,
        pagination=criteria.pagination,
    )
    logger.debug("search returned %d logs in %.3fs", len(logs), time.monotonic() - started)
    return logs


def find_logs_by_multi_match(
    session: Session,
    params: Mapping[str, Sequence[str]],
    *,
    timeout: float | None = None,
) -> list[Log]:
    """Find logs matching request parameters.

    Raises:
        InvalidParameterError: If the parameters are malformed.
        BackingStoreError: If the store fails.
    """
    return search(session, classify(params), timeout=timeout)


def find_logs_by_logbook(session: Session, name: str) -> list[Log]:
    """Find logs filed in the logbook ``name`` (globs allowed)."""
    return search(session, classify({LOGBOOK_KEY: [name]}))


def find_logs_by_tag(session: Session, name: str) -> list[Log]:
    """Find logs carrying the tag ``name`` (globs allowed)."""
    return search(session, classify({TAG_KEY: [name]}))


def find_log_by_id(session: Session, log_id: int) -> Log:
    """Get a single log by id.

    Raises:
        LogNotFoundError: If no log has this id.
    """
    logs = search(session, classify({}, log_ids=[log_id]))
    if not logs:
        raise LogNotFoundError(log_id)
    return logs[0]
