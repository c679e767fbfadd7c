"""Combine per-criterion id sets into the final candidate set."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

from olog.search.resolvers import ResolvedSet

logger = logging.getLogger(__name__)


class CriterionKind(enum.Enum):
    """Set-valued criterion kinds."""

    TAG = "tag"
    TAG_PATTERN = "tag_pattern"
    PROPERTY = "property"
    LOGBOOK = "logbook"


# Kinds whose matches are pooled as candidates; logbook then filters the pool.
POOLED_KINDS: tuple[CriterionKind, ...] = (
    CriterionKind.TAG,
    CriterionKind.PROPERTY,
    CriterionKind.TAG_PATTERN,
)


def combine(
    resolved: Mapping[CriterionKind, ResolvedSet],
    direct_ids: ResolvedSet | None = None,
) -> ResolvedSet:
    """Merge resolved criterion sets.

    Tag, tag-pattern and property matches are unioned into a candidate
    pool, logbook membership is intersected with that pool, and direct
    ids are added last. A present kind that matched nothing makes the
    whole result empty, direct ids included.

    Args:
        resolved: Resolved set per kind; missing kinds are unconstrained.
        direct_ids: Explicit ids to add to the result.

    Returns:
        UNCONSTRAINED if nothing constrains the result, EMPTY if the
        query cannot match, otherwise the matching ids.
    """
    for kind, result in resolved.items():
        if result.is_empty:
            logger.debug("%s criterion matched nothing; result is empty", kind.value)
            return ResolvedSet.empty()

    pool = ResolvedSet.unconstrained()
    for kind in POOLED_KINDS:
        pool = pool.union(resolved.get(kind, ResolvedSet.unconstrained()))

    final = pool.intersect(resolved.get(CriterionKind.LOGBOOK, ResolvedSet.unconstrained()))
    if final.is_empty:
        logger.debug("logbook filter removed every candidate")
        return final

    if direct_ids is not None:
        final = final.union(direct_ids)

    logger.debug("combined result: %s (%d ids)", final.outcome.value, len(final))
    return final
