"""Classify raw search parameters into typed criteria."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from olog.exceptions import InvalidParameterError
from olog.search.glob import has_wildcard
from olog.store.models import from_epoch

# Parameter keys with a fixed meaning; any other key names a property.
SEARCH_KEY = "search"
TAG_KEY = "tag"
LOGBOOK_KEY = "logbook"
PAGE_KEY = "page"
LIMIT_KEY = "limit"
START_KEY = "start"
END_KEY = "end"

RESERVED_KEYS: frozenset[str] = frozenset(
    {SEARCH_KEY, TAG_KEY, LOGBOOK_KEY, PAGE_KEY, LIMIT_KEY, START_KEY, END_KEY}
)

# Largest value SQLite binds as an INTEGER.
MAX_SQL_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class NameGlob:
    """Subject globs; a log matches if its subject matches any of them."""

    patterns: tuple[str, ...]


@dataclass(frozen=True)
class TagExact:
    """Tag names without wildcards."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class TagPattern:
    """Tag globs containing ``*`` or ``?``."""

    patterns: tuple[str, ...]


@dataclass(frozen=True)
class Logbook:
    """Logbook names or globs."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class Property:
    """Value globs for one property name (ORed together)."""

    name: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class DateRange:
    """Inclusive creation-time bounds in epoch seconds."""

    start: int
    end: int


@dataclass(frozen=True)
class Pagination:
    """Page size and 1-based page number."""

    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class DirectId:
    """Explicit log ids added to the result without a store lookup."""

    ids: frozenset[int]


@dataclass(frozen=True)
class SearchCriteria:
    """A parsed search request.

    Each field is either absent (None / empty tuple) or holds the typed
    criterion for that kind. Built once by :func:`classify`.
    """

    name_glob: NameGlob | None = None
    tag_exact: TagExact | None = None
    tag_pattern: TagPattern | None = None
    logbook: Logbook | None = None
    properties: tuple[Property, ...] = field(default_factory=tuple)
    date_range: DateRange | None = None
    pagination: Pagination | None = None
    direct_ids: DirectId | None = None

    @property
    def is_unconstrained(self) -> bool:
        """True when no set-valued criterion is present."""
        return (
            self.tag_exact is None
            and self.tag_pattern is None
            and self.logbook is None
            and not self.properties
            and self.direct_ids is None
        )


def _merge_keys(params: Mapping[str, Sequence[str]]) -> dict[str, list[str]]:
    """Lowercase keys, merging values of keys that differ only in case."""
    merged: dict[str, list[str]] = {}
    for key, values in params.items():
        if isinstance(values, str):
            values = [values]
        merged.setdefault(key.lower(), []).extend(values)
    return merged


def _parse_int(key: str, value: str, *, minimum: int | None = None) -> int:
    try:
        number = int(value.strip())
    except (ValueError, AttributeError):
        raise InvalidParameterError(key, value, "must be an integer") from None
    if minimum is not None and number < minimum:
        raise InvalidParameterError(key, value, f"must be at least {minimum}")
    return number


def _parse_epoch(key: str, value: str) -> int:
    seconds = _parse_int(key, value)
    try:
        from_epoch(seconds)
    except (ValueError, OverflowError, OSError):
        raise InvalidParameterError(key, value, "is not a representable timestamp") from None
    return seconds


def _first(merged: dict[str, list[str]], key: str) -> str | None:
    values = merged.get(key)
    if not values:
        return None
    return values[0]


def _classify_pagination(merged: dict[str, list[str]]) -> Pagination | None:
    limit = _first(merged, LIMIT_KEY)
    page = _first(merged, PAGE_KEY)
    if limit is None and page is None:
        return None
    if limit is None:
        raise InvalidParameterError(PAGE_KEY, page, "requires 'limit' as well")
    if page is None:
        raise InvalidParameterError(LIMIT_KEY, limit, "requires 'page' as well")
    pagination = Pagination(
        limit=_parse_int(LIMIT_KEY, limit, minimum=1),
        page=_parse_int(PAGE_KEY, page, minimum=1),
    )
    if pagination.limit > MAX_SQL_INTEGER:
        raise InvalidParameterError(LIMIT_KEY, limit, f"must be at most {MAX_SQL_INTEGER}")
    if pagination.offset > MAX_SQL_INTEGER:
        raise InvalidParameterError(PAGE_KEY, page, "is too large for this limit")
    return pagination


def _classify_date_range(merged: dict[str, list[str]]) -> DateRange | None:
    start = _first(merged, START_KEY)
    end = _first(merged, END_KEY)
    # Validate whatever was given, but a range needs both bounds.
    start_ts = _parse_epoch(START_KEY, start) if start is not None else None
    end_ts = _parse_epoch(END_KEY, end) if end is not None else None
    if start_ts is None or end_ts is None:
        return None
    return DateRange(start=start_ts, end=end_ts)


def classify(
    params: Mapping[str, Sequence[str]],
    *,
    log_ids: Iterable[int] = (),
) -> SearchCriteria:
    """Bucket request parameters into typed search criteria.

    Args:
        params: Parameter name to list of values. Keys are case-insensitive.
        log_ids: Explicit log ids to include in the result.

    Returns:
        Immutable SearchCriteria.

    Raises:
        InvalidParameterError: If pagination is partial, or a numeric
            parameter cannot be parsed or is out of range.
    """
    merged = _merge_keys(params)

    names: list[str] = []
    tags: list[str] = []
    tag_patterns: list[str] = []
    logbooks: list[str] = []
    properties: list[Property] = []

    for key, values in merged.items():
        if key == SEARCH_KEY:
            names.extend(values)
        elif key == TAG_KEY:
            for value in values:
                if has_wildcard(value):
                    tag_patterns.append(value)
                else:
                    tags.append(value)
        elif key == LOGBOOK_KEY:
            logbooks.extend(values)
        elif key in RESERVED_KEYS:
            continue  # pagination and dates are handled below
        elif values:
            properties.append(Property(name=key, values=tuple(values)))

    ids = frozenset(log_ids)

    return SearchCriteria(
        name_glob=NameGlob(tuple(names)) if names else None,
        tag_exact=TagExact(tuple(tags)) if tags else None,
        tag_pattern=TagPattern(tuple(tag_patterns)) if tag_patterns else None,
        logbook=Logbook(tuple(logbooks)) if logbooks else None,
        properties=tuple(properties),
        date_range=_classify_date_range(merged),
        pagination=_classify_pagination(merged),
        direct_ids=DirectId(ids) if ids else None,
    )
