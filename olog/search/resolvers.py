"""Resolve individual search criteria to sets of log ids."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from olog.search.criteria import Logbook as LogbookCriterion
from olog.search.criteria import Property, TagExact, TagPattern
from olog.search.glob import LIKE_ESCAPE, has_wildcard, translate
from olog.store.models import LogLogbook, LogProperty, LogTag, Logbook, Tag
from olog.store.session import store_access

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """How a criterion constrains the result."""

    UNCONSTRAINED = "unconstrained"
    MATCHED = "matched"
    EMPTY = "empty"


@dataclass(frozen=True)
class ResolvedSet:
    """Log ids satisfying one criterion kind, plus how it constrains.

    ``UNCONSTRAINED`` means the kind was absent, ``EMPTY`` means it was
    present and matched nothing, ``MATCHED`` carries a non-empty id set.
    """

    outcome: Outcome
    ids: frozenset[int] = frozenset()

    @classmethod
    def unconstrained(cls) -> ResolvedSet:
        return cls(Outcome.UNCONSTRAINED)

    @classmethod
    def empty(cls) -> ResolvedSet:
        return cls(Outcome.EMPTY)

    @classmethod
    def of(cls, ids: Iterable[int]) -> ResolvedSet:
        """Constrained set; EMPTY when ``ids`` is empty."""
        ids = frozenset(ids)
        if not ids:
            return cls.empty()
        return cls(Outcome.MATCHED, ids)

    @property
    def is_unconstrained(self) -> bool:
        return self.outcome is Outcome.UNCONSTRAINED

    @property
    def is_empty(self) -> bool:
        return self.outcome is Outcome.EMPTY

    def union(self, other: ResolvedSet) -> ResolvedSet:
        """Pool two sets; an unconstrained side contributes nothing."""
        if self.is_unconstrained:
            return other
        if other.is_unconstrained:
            return self
        return ResolvedSet.of(self.ids | other.ids)

    def intersect(self, other: ResolvedSet) -> ResolvedSet:
        """Restrict by another set; an unconstrained side restricts nothing."""
        if self.is_unconstrained:
            return other
        if other.is_unconstrained:
            return self
        return ResolvedSet.of(self.ids & other.ids)

    def __len__(self) -> int:
        return len(self.ids)


def _name_clause(column, value: str):
    """Case-insensitive exact or glob match of a name column."""
    if has_wildcard(value):
        return column.ilike(translate(value), escape=LIKE_ESCAPE)
    return func.lower(column) == value.lower()


def ids_for_tag(session: Session, value: str) -> set[int]:
    """Ids of logs carrying a tag whose name matches ``value``."""
    stmt = (
        select(LogTag.log_id)
        .join(Tag, Tag.id == LogTag.tag_id)
        .where(_name_clause(Tag.name, value))
    )
    with store_access(f"resolving tag '{value}'"):
        return set(session.scalars(stmt))


def ids_for_logbook(session: Session, value: str) -> set[int]:
    """Ids of logs filed in a logbook whose name matches ``value``."""
    stmt = (
        select(LogLogbook.log_id)
        .join(Logbook, Logbook.id == LogLogbook.logbook_id)
        .where(_name_clause(Logbook.name, value))
    )
    with store_access(f"resolving logbook '{value}'"):
        return set(session.scalars(stmt))


def ids_for_property(session: Session, prop: Property) -> set[int]:
    """Ids of logs whose property ``prop.name`` matches any of its value globs."""
    value_clauses = [
        LogProperty.value.ilike(translate(value), escape=LIKE_ESCAPE) for value in prop.values
    ]
    stmt = select(LogProperty.log_id).where(
        func.lower(LogProperty.name) == prop.name.lower(),
        or_(*value_clauses),
    )
    with store_access(f"resolving property '{prop.name}'"):
        return set(session.scalars(stmt))


def _resolve_each(session: Session, values: Iterable[str], lookup, kind: str) -> ResolvedSet:
    """Union of per-value lookups; any value matching nothing empties the kind."""
    ids: set[int] = set()
    for value in values:
        found = lookup(session, value)
        if not found:
            logger.debug("%s '%s' matched no logs", kind, value)
            return ResolvedSet.empty()
        ids |= found
    logger.debug("%s resolved to %d logs", kind, len(ids))
    return ResolvedSet.of(ids)


def resolve_tags(session: Session, criterion: TagExact | TagPattern | None) -> ResolvedSet:
    """Resolve exact tag names or tag globs."""
    if criterion is None:
        return ResolvedSet.unconstrained()
    if isinstance(criterion, TagExact):
        return _resolve_each(session, criterion.names, ids_for_tag, "tag")
    return _resolve_each(session, criterion.patterns, ids_for_tag, "tag pattern")


def resolve_logbooks(session: Session, criterion: LogbookCriterion | None) -> ResolvedSet:
    """Resolve logbook names or globs."""
    if criterion is None:
        return ResolvedSet.unconstrained()
    return _resolve_each(session, criterion.names, ids_for_logbook, "logbook")


def resolve_properties(session: Session, properties: tuple[Property, ...]) -> ResolvedSet:
    """Resolve property criteria: OR within a name, AND across names."""
    if not properties:
        return ResolvedSet.unconstrained()

    result = ResolvedSet.unconstrained()
    for prop in properties:
        found = ResolvedSet.of(ids_for_property(session, prop))
        logger.debug("property '%s' resolved to %d logs", prop.name, len(found))
        result = result.intersect(found)
        if result.is_empty:
            return result
    return result


def resolve_log_ids(ids: Iterable[int]) -> ResolvedSet:
    """Explicit ids, taken without a store round-trip."""
    ids = frozenset(ids)
    if not ids:
        return ResolvedSet.unconstrained()
    return ResolvedSet.of(ids)

