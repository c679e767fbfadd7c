"""Multi-criteria log search."""

from olog.search.combinator import CriterionKind, combine
from olog.search.criteria import (
    DateRange,
    DirectId,
    Logbook,
    NameGlob,
    Pagination,
    Property,
    SearchCriteria,
    TagExact,
    TagPattern,
    classify,
)
from olog.search.executor import execute
from olog.search.glob import has_wildcard, translate
from olog.search.query import (
    find_log_by_id,
    find_logs_by_logbook,
    find_logs_by_multi_match,
    find_logs_by_tag,
    search,
)
from olog.search.resolvers import Outcome, ResolvedSet

__all__ = [
    # Criteria
    "DateRange",
    "DirectId",
    "Logbook",
    "NameGlob",
    "Pagination",
    "Property",
    "SearchCriteria",
    "TagExact",
    "TagPattern",
    "classify",
    # Pattern translation
    "has_wildcard",
    "translate",
    # Resolution
    "CriterionKind",
    "Outcome",
    "ResolvedSet",
    "combine",
    "execute",
    # Entry points
    "find_log_by_id",
    "find_logs_by_logbook",
    "find_logs_by_multi_match",
    "find_logs_by_tag",
    "search",
]
