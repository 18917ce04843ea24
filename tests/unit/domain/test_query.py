"""Tests for discussion/domain/models/query.py."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from discussion.domain.errors import ValidationError
from discussion.domain.models.enums import FilterOperator, SortOrder
from discussion.domain.models.query import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    Filter,
    QueryOptions,
    filters_from_mapping,
)


# --- defaults ---

def test_build_without_arguments_uses_defaults():
    opts = QueryOptions.build()
    assert opts.page == 1
    assert opts.per_page == DEFAULT_PER_PAGE
    assert opts.sort_by == "created_at"
    assert opts.sort_order is SortOrder.DESC
    assert opts.filters == ()
    assert opts.search is None


def test_plain_constructor_matches_build_defaults():
    assert QueryOptions() == QueryOptions.build()


# --- page / per_page coercion ---

@pytest.mark.parametrize("page", [0, -1, -100, None])
def test_non_positive_page_becomes_one(page):
    assert QueryOptions.build(page=page).page == 1


@pytest.mark.parametrize("per_page", [0, -1, None])
def test_non_positive_per_page_becomes_ten(per_page):
    assert QueryOptions.build(per_page=per_page).per_page == 10


def test_per_page_above_max_is_capped():
    assert QueryOptions.build(per_page=500).per_page == MAX_PER_PAGE


def test_per_page_at_max_is_kept():
    assert QueryOptions.build(per_page=100).per_page == 100


def test_positive_page_is_kept():
    assert QueryOptions.build(page=7).page == 7


def test_non_numeric_page_raises_domain_validation_error():
    with pytest.raises(ValidationError):
        QueryOptions.build(page="abc")  # type: ignore[arg-type]


# --- sorting ---

def test_blank_sort_by_defaults_to_created_at():
    assert QueryOptions.build(sort_by="   ").sort_by == "created_at"


def test_sort_order_is_case_insensitive():
    assert QueryOptions.build(sort_order="ASC").sort_order is SortOrder.ASC


def test_empty_sort_order_defaults_to_desc():
    assert QueryOptions.build(sort_order="").sort_order is SortOrder.DESC


def test_unknown_sort_order_raises():
    with pytest.raises(ValidationError):
        QueryOptions.build(sort_order="sideways")


# --- search ---

def test_blank_search_becomes_none():
    assert QueryOptions.build(search="   ").search is None


def test_search_is_trimmed():
    assert QueryOptions.build(search="  monas ").search == "monas"


def test_with_search_keeps_other_options():
    opts = QueryOptions.build(page=2, per_page=5, filters=[Filter.equal("status", "active")])
    result = opts.with_search("monas")
    assert result.search == "monas"
    assert result.page == 2
    assert result.per_page == 5
    assert result.filters == opts.filters


# --- window ---

def test_limit_offset_for_third_page():
    assert QueryOptions.build(page=3, per_page=20).limit_offset() == (20, 40)


def test_window_is_half_open_range():
    assert QueryOptions.build(page=2, per_page=10).window() == (10, 20)


def test_first_page_offset_is_zero():
    assert QueryOptions.build(page=0, per_page=0).offset == 0


# --- filters ---

def test_filter_defaults_to_equal():
    assert Filter(field="status", value="active").operator is FilterOperator.EQUAL


def test_filter_contains_constructor():
    flt = Filter.contains("title", "monas")
    assert flt.operator is FilterOperator.CONTAINS
    assert flt.value == "monas"


def test_filter_field_is_trimmed():
    assert Filter.equal("  status ", "active").field == "status"


def test_filter_empty_field_raises():
    with pytest.raises(PydanticValidationError):
        Filter.equal("  ", "active")


def test_filter_unknown_operator_raises():
    with pytest.raises(PydanticValidationError):
        Filter(field="status", operator="between", value="x")


def test_with_filter_appends_in_order():
    opts = QueryOptions.build().with_filter("status", "active").with_filter(
        "title", "monas", FilterOperator.CONTAINS
    )
    assert [f.field for f in opts.filters] == ["status", "title"]
    assert opts.filters[1].operator is FilterOperator.CONTAINS


def test_with_filter_empty_field_raises_domain_error():
    with pytest.raises(ValidationError):
        QueryOptions.build().with_filter("", "active")


def test_filters_from_mapping_builds_equal_filters():
    filters = filters_from_mapping({"status": "active", "creator_id": "abc"})
    assert [(f.field, f.value) for f in filters] == [("status", "active"), ("creator_id", "abc")]
    assert all(f.operator is FilterOperator.EQUAL for f in filters)


def test_filters_from_mapping_rejects_empty_field():
    with pytest.raises(ValidationError):
        filters_from_mapping({"": 1})


# --- immutability ---

def test_query_options_is_frozen():
    opts = QueryOptions.build()
    with pytest.raises(PydanticValidationError):
        opts.page = 5  # type: ignore[misc]
