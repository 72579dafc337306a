"""Unit tests for Result Table parsing and accessors."""

from __future__ import annotations

import pytest

from analysis.results import (
    ResultTableError,
    all_window_keys,
    dataset_keys,
    get_cell,
    iter_cells,
    window_keys,
    window_label,
    window_sort_key,
)

pytestmark = pytest.mark.unit


def test_parse_keys_metrics_by_bound_name(make_table) -> None:
    """Positional arrays become per-bound records."""

    table = make_table({"DS1": {"w1": {"accuracy": [0.9, 0.8], "pruned": [100, 50], "times": [5, 6]}}})

    cell = get_cell(table, "DS1", "w1")
    assert cell is not None
    assert cell.for_bound("A").pruned == 100.0
    assert cell.for_bound("B").accuracy == 0.8
    assert cell.for_bound("B").time == 6.0
    assert cell.has_pruned


def test_window_keys_sort_numerically() -> None:
    """Window identifiers sort by their embedded number, not lexicographically."""

    assert sorted(["w10", "w2", "w1"], key=window_sort_key) == ["w1", "w2", "w10"]


def test_window_keys_without_numbers_sort_last() -> None:
    """Identifiers without digits follow numbered ones alphabetically."""

    assert sorted(["full", "w3", "auto", "w20"], key=window_sort_key) == ["w3", "w20", "auto", "full"]


def test_window_label_strips_prefix() -> None:
    """Display labels drop the leading non-digit prefix."""

    assert window_label("w5") == "5"
    assert window_label("12") == "12"
    assert window_label("full") == "full"


def test_accessors_order_datasets_and_windows(make_table) -> None:
    """Datasets sort alphabetically and windows numerically, regardless of input order."""

    cell = {"pruned": [1, 2]}
    table = make_table({"b": {"w10": cell, "w2": cell}, "a": {"w1": cell}})

    assert dataset_keys(table) == ("a", "b")
    assert window_keys(table, "b") == ("w2", "w10")
    assert all_window_keys(table) == ("w1", "w2", "w10")
    assert [(ds, w) for ds, w, _ in iter_cells(table)] == [("a", "w1"), ("b", "w2"), ("b", "w10")]


def test_missing_selection_returns_none(make_table) -> None:
    """Unknown datasets or windows are reported as absent, not raised."""

    table = make_table({"DS1": {"w1": {"pruned": [1, 2]}}})

    assert get_cell(table, "DS1", "w9") is None
    assert get_cell(table, "nope", "w1") is None
    assert get_cell(table, None, "w1") is None
    assert window_keys(table, "nope") == ()


def test_empty_cells_keep_their_window_key(make_table) -> None:
    """Null or metric-less cells are absent but their window stays on the axis."""

    table = make_table({"DS1": {"w1": None, "w2": {}, "w3": {"pruned": [1, 2]}}})

    assert window_keys(table, "DS1") == ("w1", "w2", "w3")
    assert get_cell(table, "DS1", "w1") is None
    assert get_cell(table, "DS1", "w2") is None
    assert [w for _, w, _ in iter_cells(table)] == ["w3"]


def test_partial_cells_read_missing_fields_as_zero(make_table) -> None:
    """A cell without times still parses, with zero times."""

    table = make_table({"DS1": {"w1": {"accuracy": [0.5, 0.6]}}})

    cell = get_cell(table, "DS1", "w1")
    assert cell is not None
    assert cell.for_bound("A").time == 0.0
    assert cell.for_bound("A").pruned == 0.0
    assert not cell.has_pruned


def test_empty_table_is_valid(make_table) -> None:
    """An empty mapping parses into an empty table."""

    table = make_table({})
    assert table.is_empty
    assert dataset_keys(table) == ()


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"DS1": []},
        {"DS1": {"w1": [1, 2]}},
        {"DS1": {"w1": {"pruned": [1]}}},
        {"DS1": {"w1": {"pruned": [1, "2"]}}},
        {"DS1": {"w1": {"pruned": [1, True]}}},
        {"DS1": {"w1": {"pruned": [1, -2]}}},
        {"DS1": {"w1": {"accuracy": [0.5, 1.5]}}},
        {"DS1": {"w1": {"times": [1.0, float("nan")]}}},
        {"DS1": {"w1": {"pruned": [10**400, 1]}}},
    ],
)
def test_malformed_tables_are_rejected(make_table, raw) -> None:
    """Shape and value violations raise ResultTableError."""

    with pytest.raises(ResultTableError):
        make_table(raw)
