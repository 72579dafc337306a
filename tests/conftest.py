"""Pytest fixtures shared across engine and Django integration tests."""

from __future__ import annotations

import json
from collections.abc import Sequence

import pytest

from analysis.bounds import BoundRegistry
from analysis.results import ResultTable, parse_result_table


@pytest.fixture
def ab_registry() -> BoundRegistry:
    """Return a two-bound registry ("A", "B")."""

    return BoundRegistry.from_names(["A", "B"])


@pytest.fixture
def make_table(ab_registry):
    """Return a factory building a ResultTable from raw data with the A/B registry."""

    def _make(raw: dict, registry: BoundRegistry | None = None) -> ResultTable:
        return parse_result_table(raw, registry=registry or ab_registry)

    return _make


@pytest.fixture
def six_bound_raw() -> dict:
    """Return a raw Result Table aligned to the default six-bound registry."""

    return {
        "GunPoint": {
            "w1": {
                "accuracy": [0.9, 0.9, 0.9, 0.9, 0.9, 0.9],
                "pruned": [0, 100, 120, 130, 140, 135],
                "times": [50.0, 20.0, 18.0, 17.0, 16.0, 16.5],
            },
            "w10": {
                "accuracy": [0.95, 0.95, 0.95, 0.95, 0.95, 0.95],
                "pruned": [0, 80, 90, 95, 100, 110],
                "times": [80.0, 40.0, 36.0, 34.0, 33.0, 32.0],
            },
        },
        "ECG200": {
            "w1": {
                "accuracy": [0.88, 0.88, 0.88, 0.88, 0.88, 0.88],
                "pruned": [0, 40, 50, 55, 60, 60],
                "times": [30.0, 15.0, 14.0, 13.0, 12.0, 12.0],
            },
        },
    }


@pytest.fixture
def results_file(tmp_path, settings, six_bound_raw):
    """Write the six-bound table to disk and point settings at it."""

    path = tmp_path / "results.json"
    path.write_text(json.dumps(six_bound_raw), encoding="utf-8")
    settings.BOUNDS_RESULTS_PATH = path
    return path


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django or file I/O.
    - `integration`: tests touching Django, views, commands, settings, or files.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
