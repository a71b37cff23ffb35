from datetime import date

import pytest

from salesreport.services.row_sort import SortDirection, make_comparator, sort_rows


def _rows():
    return [
        {"owner": "C", "totalValue": 50, "created": date(2020, 3, 2)},
        {"owner": "A", "totalValue": 100, "created": date(2020, 3, 9)},
        {"owner": "B", "totalValue": 75, "created": date(2020, 3, 1)},
    ]


def test_scenario_total_value_descending():
    rows = [{"owner": "A", "totalValue": 100}, {"owner": "B", "totalValue": 50}]
    result = sort_rows(rows, "totalValue", "desc")
    assert [r["owner"] for r in result] == ["A", "B"]


def test_comparator_signs():
    asc = make_comparator("totalValue", SortDirection.ASC)
    desc = make_comparator("totalValue", SortDirection.DESC)
    a, b = {"totalValue": 1}, {"totalValue": 2}
    assert asc(a, b) == -1
    assert asc(b, a) == 1
    assert asc(a, dict(a)) == 0
    assert desc(a, b) == 1


@pytest.mark.parametrize("field", ["owner", "totalValue", "created"])
def test_descending_is_reverse_of_ascending(field):
    rows = _rows()
    asc = sort_rows(rows, field, SortDirection.ASC)
    desc = sort_rows(rows, field, SortDirection.DESC)
    assert list(reversed(asc)) == desc


def test_natural_ordering_per_type():
    rows = _rows()
    assert [r["owner"] for r in sort_rows(rows, "owner", "asc")] == ["A", "B", "C"]
    assert [r["created"].day for r in sort_rows(rows, "created", "asc")] == [1, 2, 9]


def test_sort_is_idempotent():
    once = sort_rows(_rows(), "totalValue", "asc")
    twice = sort_rows(once, "totalValue", "asc")
    assert twice == once


def test_sort_is_stable_for_ties():
    rows = [
        {"name": "first", "opps": 4},
        {"name": "second", "opps": 5},
        {"name": "third", "opps": 4},
        {"name": "fourth", "opps": 4},
    ]
    for direction in ("asc", "desc"):
        ordered = [r["name"] for r in sort_rows(rows, "opps", direction) if r["opps"] == 4]
        assert ordered == ["first", "third", "fourth"]


def test_input_is_not_mutated():
    rows = _rows()
    snapshot = list(rows)
    result = sort_rows(rows, "owner", "asc")
    assert rows == snapshot
    assert result is not rows


def test_missing_field_compares_equal_and_never_raises():
    cmp = make_comparator("totalValue", "asc")
    assert cmp({"totalValue": 3}, {}) == 0
    assert cmp({}, {"totalValue": 3}) == 0
    assert cmp({}, {}) == 0
    rows = [{"id": 1}, {"id": 2, "totalValue": 5}, {"id": 3}]
    assert [r["id"] for r in sort_rows(rows, "totalValue", "desc")] == [1, 2, 3]


def test_none_and_incomparable_values_compare_equal():
    cmp = make_comparator("v", 1)
    assert cmp({"v": None}, {"v": 4}) == 0
    assert cmp({"v": "x"}, {"v": 4}) == 0


def test_unknown_field_is_a_no_op():
    rows = _rows()
    assert sort_rows(rows, "doesNotExist", "desc") == rows


def test_empty_rows():
    assert sort_rows([], "owner", "asc") == []


def test_direction_coercion():
    assert SortDirection.coerce("ASC") is SortDirection.ASC
    assert SortDirection.coerce(-1) is SortDirection.DESC
    assert SortDirection.DESC.sign == -1
    with pytest.raises(ValueError):
        SortDirection.coerce("sideways")
