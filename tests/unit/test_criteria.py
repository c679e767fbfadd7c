"""Unit tests for search criteria classification."""

from __future__ import annotations

import pytest

from olog.exceptions import InvalidParameterError
from olog.search.criteria import (
    MAX_SQL_INTEGER,
    DateRange,
    DirectId,
    Logbook,
    NameGlob,
    Pagination,
    Property,
    TagExact,
    TagPattern,
    classify,
)


class TestBuckets:
    def test_empty_params_are_unconstrained(self) -> None:
        criteria = classify({})
        assert criteria.is_unconstrained
        assert criteria.name_glob is None
        assert criteria.pagination is None
        assert criteria.date_range is None

    def test_search_key_becomes_name_glob(self) -> None:
        criteria = classify({"search": ["*dump*", "Shift*"]})
        assert criteria.name_glob == NameGlob(("*dump*", "Shift*"))
        # Subject globs filter at fetch time; they do not constrain the id set
        assert criteria.is_unconstrained

    def test_tags_split_by_wildcard(self) -> None:
        criteria = classify({"tag": ["urgent", "beam*", "ops?", "review"]})
        assert criteria.tag_exact == TagExact(("urgent", "review"))
        assert criteria.tag_pattern == TagPattern(("beam*", "ops?"))

    def test_only_exact_tags(self) -> None:
        criteria = classify({"tag": ["urgent"]})
        assert criteria.tag_exact == TagExact(("urgent",))
        assert criteria.tag_pattern is None

    def test_logbook(self) -> None:
        criteria = classify({"logbook": ["Operations", "Phys*"]})
        assert criteria.logbook == Logbook(("Operations", "Phys*"))

    def test_unknown_keys_become_properties(self) -> None:
        criteria = classify({"shift": ["night", "day"], "crew": ["B"]})
        assert set(criteria.properties) == {
            Property("shift", ("night", "day")),
            Property("crew", ("B",)),
        }

    def test_direct_ids(self) -> None:
        criteria = classify({}, log_ids=[3, 7, 3])
        assert criteria.direct_ids == DirectId(frozenset({3, 7}))
        assert not criteria.is_unconstrained

    def test_no_direct_ids(self) -> None:
        assert classify({}, log_ids=[]).direct_ids is None

    def test_single_string_value_is_accepted(self) -> None:
        criteria = classify({"tag": "urgent"})
        assert criteria.tag_exact == TagExact(("urgent",))


class TestCaseInsensitiveKeys:
    def test_reserved_keys_ignore_case(self) -> None:
        criteria = classify({"TAG": ["urgent"], "LogBook": ["ops"]})
        assert criteria.tag_exact == TagExact(("urgent",))
        assert criteria.logbook == Logbook(("ops",))

    def test_keys_differing_in_case_are_merged(self) -> None:
        criteria = classify({"tag": ["urgent"], "Tag": ["beam"]})
        assert criteria.tag_exact == TagExact(("urgent", "beam"))

    def test_property_names_are_lowercased(self) -> None:
        criteria = classify({"Shift": ["night"]})
        assert criteria.properties == (Property("shift", ("night",)),)


class TestPagination:
    def test_limit_and_page(self) -> None:
        criteria = classify({"limit": ["10"], "page": ["3"]})
        assert criteria.pagination == Pagination(limit=10, page=3)
        assert criteria.pagination.offset == 20

    def test_first_page_has_no_offset(self) -> None:
        assert Pagination(limit=5, page=1).offset == 0

    def test_second_page_offset(self) -> None:
        assert Pagination(limit=10, page=2).offset == 10

    def test_page_without_limit_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"page": ["2"]})
        assert exc_info.value.key == "page"

    def test_limit_without_page_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"limit": ["2"]})
        assert exc_info.value.key == "limit"

    def test_non_numeric_limit(self) -> None:
        with pytest.raises(InvalidParameterError):
            classify({"limit": ["ten"], "page": ["1"]})

    def test_zero_page_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError):
            classify({"limit": ["10"], "page": ["0"]})

    def test_limit_beyond_sql_integer_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"limit": [str(MAX_SQL_INTEGER + 1)], "page": ["1"]})
        assert exc_info.value.key == "limit"

    def test_offset_beyond_sql_integer_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"limit": ["10"], "page": ["10000000000000000000"]})
        assert exc_info.value.key == "page"

    def test_largest_offset_is_accepted(self) -> None:
        criteria = classify({"limit": ["1"], "page": [str(MAX_SQL_INTEGER + 1)]})
        assert criteria.pagination.offset == MAX_SQL_INTEGER

    def test_first_value_wins(self) -> None:
        criteria = classify({"limit": ["5", "50"], "page": ["2", "9"]})
        assert criteria.pagination == Pagination(limit=5, page=2)

    def test_pagination_keys_are_not_properties(self) -> None:
        criteria = classify({"limit": ["5"], "page": ["1"]})
        assert criteria.properties == ()


class TestDateRange:
    def test_both_bounds(self) -> None:
        criteria = classify({"start": ["1700000000"], "end": ["1700086400"]})
        assert criteria.date_range == DateRange(start=1700000000, end=1700086400)

    def test_single_bound_is_ignored(self) -> None:
        assert classify({"start": ["1700000000"]}).date_range is None
        assert classify({"end": ["1700000000"]}).date_range is None

    def test_non_numeric_bound_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"start": ["yesterday"], "end": ["1700000000"]})
        assert exc_info.value.key == "start"

    def test_date_keys_are_not_properties(self) -> None:
        criteria = classify({"start": ["1"], "end": ["2"]})
        assert criteria.properties == ()

    def test_out_of_range_start_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"start": ["-99999999999999"], "end": ["1"]})
        assert exc_info.value.key == "start"

    def test_overflowing_end_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            classify({"start": ["0"], "end": [str(10**30)]})
        assert exc_info.value.key == "end"

    def test_out_of_range_lone_bound_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterError):
            classify({"end": ["99999999999999"]})
