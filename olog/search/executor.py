"""Fetch full log records for a resolved id set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from olog.search.criteria import DateRange, NameGlob, Pagination
from olog.search.glob import LIKE_ESCAPE, translate
from olog.search.resolvers import ResolvedSet
from olog.store.models import Log, from_epoch
from olog.store.session import store_access

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def execute(
    session: Session,
    resolved: ResolvedSet,
    *,
    name_glob: NameGlob | None = None,
    date_range: DateRange | None = None,
    pagination: Pagination | None = None,
) -> list[Log]:
    """Load the logs for a resolved id set, newest first.

    Args:
        session: Store session for this query.
        resolved: Combined criterion result.
        name_glob: Subject globs; a log must match at least one.
        date_range: Inclusive creation-time bounds.
        pagination: Page size and page number.

    Returns:
        Logs with logbooks, tags and properties loaded. Empty when the
        resolved set is empty.

    Raises:
        BackingStoreError: If the store query fails.
    """
    if resolved.is_empty:
        return []

    stmt = select(Log).options(
        selectinload(Log.logbooks),
        selectinload(Log.tags),
        selectinload(Log.properties),
    )

    if not resolved.is_unconstrained:
        stmt = stmt.where(Log.id.in_(sorted(resolved.ids)))

    if name_glob is not None:
        stmt = stmt.where(
            or_(
                *(
                    Log.subject.ilike(translate(pattern), escape=LIKE_ESCAPE)
                    for pattern in name_glob.patterns
                )
            )
        )

    if date_range is not None:
        stmt = stmt.where(
            Log.created_at >= from_epoch(date_range.start),
            Log.created_at <= from_epoch(date_range.end),
        )

    stmt = stmt.order_by(Log.created_at.desc(), Log.id.desc())

    if pagination is not None:
        stmt = stmt.limit(pagination.limit).offset(pagination.offset)

    with store_access("fetching logs"):
        return list(session.scalars(stmt).all())
