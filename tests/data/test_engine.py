# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the in-memory filter → sort → paginate engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

import pytest

from queryfly.data.cursor import decode_cursor, encode_cursor, start_cursor
from queryfly.data.engine import (
    apply_filters,
    apply_sorting,
    compare_values,
    execute_query,
    matches,
    paginate,
    read_field,
    strict_equals,
    to_text,
)
from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.data.pageable import PaginationSpec, SortSpec
from queryfly.data.query import QuerySpec


@dataclass(frozen=True)
class Row:
    id: str
    name: str
    age: int | None = None


def _items(count: int) -> list[dict[str, Any]]:
    return [
        {"id": str(i), "displayName": f"Item{i:02d}", "userType": "LEAD" if i % 2 == 0 else "MEMBER"}
        for i in range(count)
    ]


def _names(items: Any) -> list[str]:
    return [item["displayName"] for item in items]


# ---------------------------------------------------------------------------
# Field access and coercion
# ---------------------------------------------------------------------------


class TestReadField:
    def test_mapping(self) -> None:
        assert read_field({"a": 1}, "a") == 1

    def test_object_attribute(self) -> None:
        assert read_field(Row(id="1", name="x"), "name") == "x"

    def test_absent_reads_none(self) -> None:
        assert read_field({"a": 1}, "b") is None
        assert read_field(Row(id="1", name="x"), "missing") is None


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "text"),
        [(None, ""), (True, "true"), (False, "false"), (3.0, "3"), (2.5, "2.5"), (7, "7"), ("Ab", "Ab")],
    )
    def test_to_text(self, value: Any, text: str) -> None:
        assert to_text(value) == text

    def test_strict_equals_rejects_bool_number_mix(self) -> None:
        assert strict_equals(1, True) is False
        assert strict_equals(0, False) is False
        assert strict_equals(True, True) is True

    def test_strict_equals_rejects_string_number_mix(self) -> None:
        assert strict_equals("1", 1) is False

    def test_strict_equals_numbers(self) -> None:
        assert strict_equals(1, 1.0) is True


# ---------------------------------------------------------------------------
# Filter stage
# ---------------------------------------------------------------------------


class TestOperators:
    item = {"email": "alice.smith@example.com", "age": 30, "userType": "LEAD", "isAdmin": False}

    @pytest.mark.parametrize(
        ("op", "field", "value", "expected"),
        [
            ("eq", "userType", "LEAD", True),
            ("eq", "userType", "lead", False),
            ("eq", "isAdmin", 0, False),
            ("neq", "userType", "MEMBER", True),
            ("neq", "userType", "LEAD", False),
            ("contains", "email", "ALICE", True),
            ("contains", "email", "bob", False),
            ("startsWith", "email", "Alice.", True),
            ("startsWith", "email", "smith", False),
            ("endsWith", "email", "EXAMPLE.COM", True),
            ("endsWith", "email", "example.org", False),
            ("contains", "age", "3", True),
            ("gt", "age", 29, True),
            ("gt", "age", 30, False),
            ("gte", "age", 30, True),
            ("lt", "age", 31, True),
            ("lt", "age", 30, False),
            ("lte", "age", 30, True),
            ("in", "userType", ["LEAD", "MEMBER"], True),
            ("in", "userType", ("MEMBER",), False),
            ("in", "userType", "LEAD", False),
            ("in", "age", [30.0], True),
        ],
    )
    def test_operator(self, op: str, field: str, value: Any, expected: bool) -> None:
        assert matches(self.item, FilterCondition(field, op, value)) is expected

    def test_string_relational_compares_lexically(self) -> None:
        assert matches({"name": "beta"}, FilterCondition("name", FilterOperator.GT, "alpha")) is True

    def test_absent_field_never_satisfies_relational(self) -> None:
        assert matches({}, FilterCondition("age", FilterOperator.GT, 1)) is False
        assert matches({}, FilterCondition("age", FilterOperator.LTE, 1)) is False

    def test_absent_field_equals_none(self) -> None:
        assert matches({}, FilterCondition("phone", FilterOperator.EQ, None)) is True
        assert matches({}, FilterCondition("phone", FilterOperator.NEQ, None)) is False

    def test_mixed_types_in_relational_raise(self) -> None:
        with pytest.raises(TypeError):
            matches({"age": 30}, FilterCondition("age", FilterOperator.GT, "20"))

    def test_unknown_operator_fails_open_by_default(self) -> None:
        assert matches({"a": 1}, FilterCondition("a", "regex", "^x")) is True

    def test_unknown_operator_can_fail_closed(self) -> None:
        assert matches({"a": 1}, FilterCondition("a", "regex", "^x"), fail_open=False) is False


class TestApplyFilters:
    def test_conditions_are_anded(self) -> None:
        items = [{"a": 1, "b": "x"}, {"a": 1, "b": "y"}, {"a": 2, "b": "x"}]
        result = apply_filters(items, [FilterCondition.eq("a", 1), FilterCondition.eq("b", "x")])
        assert result == [{"a": 1, "b": "x"}]

    def test_no_filters_keeps_everything(self) -> None:
        items = _items(3)
        assert apply_filters(items, []) == items

    def test_works_on_objects(self) -> None:
        rows = [Row("1", "ann", 20), Row("2", "bob", 40)]
        assert apply_filters(rows, [FilterCondition("age", FilterOperator.GTE, 30)]) == [rows[1]]


# ---------------------------------------------------------------------------
# Sort stage
# ---------------------------------------------------------------------------


class TestCompareValues:
    def test_three_way(self) -> None:
        assert compare_values(1, 2) == -1
        assert compare_values(2, 1) == 1
        assert compare_values("a", "a") == 0

    def test_none_sorts_last(self) -> None:
        assert compare_values(None, 1) == 1
        assert compare_values(1, None) == -1
        assert compare_values(None, None) == 0


class TestApplySorting:
    def test_ascending(self) -> None:
        items = [{"n": 3}, {"n": 1}, {"n": 2}]
        assert [i["n"] for i in apply_sorting(items, [SortSpec.asc("n")])] == [1, 2, 3]

    def test_descending(self) -> None:
        items = [{"n": 3}, {"n": 1}, {"n": 2}]
        assert [i["n"] for i in apply_sorting(items, [SortSpec.desc("n")])] == [3, 2, 1]

    def test_later_specs_break_ties(self) -> None:
        items = [
            {"id": "a", "type": "LEAD", "name": "Zed"},
            {"id": "b", "type": "MEMBER", "name": "Amy"},
            {"id": "c", "type": "LEAD", "name": "Bea"},
        ]
        result = apply_sorting(items, [SortSpec.asc("type"), SortSpec.desc("name")])
        assert [i["id"] for i in result] == ["a", "c", "b"]

    def test_full_ties_keep_input_order(self) -> None:
        items = [{"id": str(i), "group": i % 2} for i in range(10)]
        result = apply_sorting(items, [SortSpec.asc("group")])
        assert [i["id"] for i in result] == ["0", "2", "4", "6", "8", "1", "3", "5", "7", "9"]

    def test_missing_values_last_ascending_first_descending(self) -> None:
        items = [{"id": "x"}, {"id": "y", "n": 2}, {"id": "z", "n": 1}]
        assert [i["id"] for i in apply_sorting(items, [SortSpec.asc("n")])] == ["z", "y", "x"]
        assert [i["id"] for i in apply_sorting(items, [SortSpec.desc("n")])] == ["x", "y", "z"]

    def test_input_is_not_mutated(self) -> None:
        items = [{"n": 2}, {"n": 1}]
        apply_sorting(items, [SortSpec.asc("n")])
        assert items == [{"n": 2}, {"n": 1}]


# ---------------------------------------------------------------------------
# Pagination stage
# ---------------------------------------------------------------------------


class TestPaginateOffset:
    def test_first_page(self) -> None:
        result = paginate(list(range(25)), PaginationSpec(page_size=10))
        assert result.items == tuple(range(10))
        assert result.page_info.has_next_page is True
        assert result.page_info.total_count == 25
        assert result.page_info.next_cursor is None

    def test_last_partial_page(self) -> None:
        result = paginate(list(range(25)), PaginationSpec(page_size=10, page_index=2))
        assert result.items == (20, 21, 22, 23, 24)
        assert result.page_info.has_next_page is False

    def test_exact_boundary_has_no_next_page(self) -> None:
        result = paginate(list(range(20)), PaginationSpec(page_size=10, page_index=1))
        assert len(result.items) == 10
        assert result.page_info.has_next_page is False

    def test_past_the_end_is_empty(self) -> None:
        result = paginate(list(range(5)), PaginationSpec(page_size=10, page_index=4))
        assert result.items == ()
        assert result.page_info.has_next_page is False
        assert result.page_info.total_count == 5

    def test_empty_cursor_is_offset_mode(self) -> None:
        result = paginate(list(range(30)), PaginationSpec(page_size=10, page_index=1, cursor=""))
        assert result.items == tuple(range(10, 20))
        assert result.page_info.total_count == 30


class TestPaginateCursor:
    def test_cursor_page_has_next_cursor_and_no_total(self) -> None:
        result = paginate(list(range(12)), PaginationSpec(page_size=5, cursor=start_cursor()))
        assert result.items == (0, 1, 2, 3, 4)
        assert result.page_info.has_next_page is True
        assert result.page_info.next_cursor == encode_cursor(5)
        assert result.page_info.total_count is None

    def test_last_cursor_page_has_no_cursor(self) -> None:
        result = paginate(list(range(12)), PaginationSpec(page_size=5, cursor=encode_cursor(10)))
        assert result.items == (10, 11)
        assert result.page_info.has_next_page is False
        assert result.page_info.next_cursor is None

    def test_undecodable_cursor_starts_from_zero(self) -> None:
        result = paginate(list(range(12)), PaginationSpec(page_size=5, cursor="not a cursor!"))
        assert result.items == (0, 1, 2, 3, 4)

    def test_cursor_past_the_end_is_empty(self) -> None:
        result = paginate(list(range(3)), PaginationSpec(page_size=5, cursor=encode_cursor(50)))
        assert result.items == ()
        assert result.page_info.has_next_page is False


# ---------------------------------------------------------------------------
# Whole pipeline
# ---------------------------------------------------------------------------


class TestExecuteQuery:
    def test_sorted_first_page(self) -> None:
        items = list(reversed(_items(25)))
        spec = QuerySpec(pagination=PaginationSpec(page_size=10, page_index=0), sorting=[SortSpec.asc("displayName")])
        result = execute_query(items, spec)
        assert _names(result.items) == [f"Item{i:02d}" for i in range(10)]
        assert result.page_info.has_next_page is True
        assert result.page_info.total_count == 25

    def test_sorted_third_page(self) -> None:
        spec = QuerySpec(pagination=PaginationSpec(page_size=10, page_index=2), sorting=[SortSpec.asc("displayName")])
        result = execute_query(_items(25), spec)
        assert _names(result.items) == [f"Item{i:02d}" for i in range(20, 25)]
        assert result.page_info.has_next_page is False
        assert result.page_info.total_count == 25

    def test_filter_across_all_pages(self) -> None:
        items = _items(100)
        spec = QuerySpec(
            pagination=PaginationSpec(page_size=15),
            filters=[FilterCondition("userType", FilterOperator.EQ, "LEAD")],
        )
        seen: list[dict[str, Any]] = []
        current: QuerySpec[str] | None = spec
        while current is not None:
            result = execute_query(items, current)
            seen.extend(result.items)
            current = current.next_page(result.page_info)
        assert len(seen) == 50
        assert all(item["userType"] == "LEAD" for item in seen)

    def test_cursor_walk_is_contiguous(self) -> None:
        items = _items(23)
        spec = QuerySpec(pagination=PaginationSpec(page_size=5, cursor=start_cursor()))
        first = execute_query(items, spec)
        assert first.page_info.next_cursor is not None

        second = execute_query(items, spec.with_pagination(PaginationSpec(page_size=5, cursor=first.page_info.next_cursor)))
        assert _names(first.items) == [f"Item{i:02d}" for i in range(5)]
        assert _names(second.items) == [f"Item{i:02d}" for i in range(5, 10)]
        assert decode_cursor(first.page_info.next_cursor) == 5

    def test_full_cursor_walk_visits_every_item_once(self) -> None:
        items = _items(23)
        spec: QuerySpec[str] | None = QuerySpec(pagination=PaginationSpec(page_size=4, cursor=start_cursor()))
        seen: list[str] = []
        while spec is not None:
            result = execute_query(items, spec)
            seen.extend(item["id"] for item in result.items)
            spec = spec.next_page(result.page_info)
        assert seen == [str(i) for i in range(23)]

    def test_first_page_without_cursor_is_offset_mode(self) -> None:
        spec = QuerySpec(pagination=PaginationSpec(page_size=5, cursor=None))
        result = execute_query(_items(12), spec)
        assert [item["id"] for item in result.items] == ["0", "1", "2", "3", "4"]
        assert result.page_info.total_count == 12
        assert result.page_info.next_cursor is None

    def test_empty_collection(self) -> None:
        spec = QuerySpec(
            pagination=PaginationSpec(page_size=10),
            filters=[FilterCondition.eq("userType", "LEAD")],
            sorting=[SortSpec.asc("displayName")],
        )
        result = execute_query([], spec)
        assert result.items == ()
        assert result.page_info.has_next_page is False
        assert result.page_info.total_count == 0

    def test_inputs_are_not_mutated(self) -> None:
        items = list(reversed(_items(10)))
        before = copy.deepcopy(items)
        spec = QuerySpec(
            pagination=PaginationSpec(page_size=3),
            filters=[FilterCondition.neq("userType", "X")],
            sorting=[SortSpec.asc("displayName")],
        )
        spec_before = copy.deepcopy(spec)
        execute_query(items, spec)
        assert items == before
        assert spec == spec_before

    def test_identical_queries_give_identical_results(self) -> None:
        items = _items(40)
        spec = QuerySpec(
            pagination=PaginationSpec(page_size=7, page_index=1),
            filters=[FilterCondition.contains("displayName", "item")],
            sorting=[SortSpec.asc("userType"), SortSpec.desc("displayName")],
        )
        assert execute_query(items, spec) == execute_query(items, spec)


class TestProperties:
    """Invariants checked over a grid of specs against one collection."""

    ITEMS = [
        {"id": str(i), "score": (i * 7) % 13, "name": f"n{(i * 5) % 11}", "kind": ("a", "b", "c")[i % 3]}
        for i in range(47)
    ]

    SPECS = [
        QuerySpec(pagination=PaginationSpec(page_size=size, page_index=index), filters=filters, sorting=sorting)
        for size in (1, 5, 20, 100)
        for index in (0, 1, 3)
        for filters in ([], [FilterCondition("score", FilterOperator.GTE, 6)], [FilterCondition.in_list("kind", ["a", "c"])])
        for sorting in ([], [SortSpec.desc("score"), SortSpec.asc("name")])
    ]

    @pytest.mark.parametrize("spec", SPECS)
    def test_invariants(self, spec: QuerySpec[str]) -> None:
        result = execute_query(self.ITEMS, spec)

        # page size bound
        assert len(result.items) <= spec.pagination.page_size

        # every item satisfies every filter
        for item in result.items:
            assert all(matches(item, f) for f in spec.filters)

        # adjacent pairs are in order under the first non-tying key
        for a, b in zip(result.items, result.items[1:]):
            for s in spec.sorting:
                cmp = compare_values(a[s.field], b[s.field])
                if cmp != 0:
                    assert (cmp < 0) == (s.direction == "asc")
                    break

        # offset total-count consistency
        info = result.page_info
        assert info.total_count is not None
        index = spec.pagination.page_index or 0
        assert info.has_next_page == ((index + 1) * spec.pagination.page_size < info.total_count)
