"""Result Table model, validation, and accessors.

A Result Table maps dataset name -> window key -> MetricsCell. Raw input keeps
per-bound metrics in positional arrays; parsing converts them into records
keyed by bound name so nothing downstream depends on array positions.

Window keys declared in the raw input are kept even when their cell is empty
(null or without metrics) so window axes stay stable; such windows map to None.
Accessors never raise for missing datasets or windows. Absence means "no data
for this selection" and is reported as None or an empty tuple.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .bounds import DEFAULT_REGISTRY, BoundRegistry

METRIC_FIELDS: Final[tuple[str, ...]] = ("accuracy", "pruned", "times")

_WINDOW_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_WINDOW_PREFIX_RE = re.compile(r"^\D+")


class ResultTableError(ValueError):
    """Raised when a raw Result Table does not match the expected shape."""


@dataclass(frozen=True, slots=True)
class BoundMetrics:
    """Metrics recorded for one bound in one (dataset, window) cell.

    Attributes:
        accuracy: Classification accuracy as a fraction in [0, 1].
        pruned: Number of distance computations avoided.
        time: Elapsed classification time in milliseconds.
    """

    accuracy: float = 0.0
    pruned: float = 0.0
    time: float = 0.0


ZERO_METRICS: Final[BoundMetrics] = BoundMetrics()


@dataclass(frozen=True)
class MetricsCell:
    """Metrics for one (dataset, window) combination.

    Attributes:
        metrics: Read-only mapping of bound name -> BoundMetrics.
        fields: Raw metric fields that were present ("accuracy", "pruned",
            "times"). Missing fields read as 0.
    """

    metrics: Mapping[str, BoundMetrics]
    fields: frozenset[str] = frozenset(METRIC_FIELDS)

    def for_bound(self, name: str) -> BoundMetrics:
        """Return metrics for a bound, or zeros when the bound is unknown."""

        return self.metrics.get(name, ZERO_METRICS)

    @property
    def has_pruned(self) -> bool:
        """Whether the raw cell carried pruned counts."""

        return "pruned" in self.fields


@dataclass(frozen=True)
class ResultTable:
    """Immutable snapshot of raw benchmark results.

    Attributes:
        datasets: Read-only mapping of dataset -> window -> MetricsCell, with
            None for declared windows that carry no metrics.
        registry: Bound registry the raw arrays were aligned to.
    """

    datasets: Mapping[str, Mapping[str, MetricsCell | None]]
    registry: BoundRegistry = DEFAULT_REGISTRY

    @property
    def is_empty(self) -> bool:
        """Whether the table holds no datasets at all."""

        return not self.datasets


def parse_result_table(
    raw: object,
    registry: BoundRegistry = DEFAULT_REGISTRY,
) -> ResultTable:
    """Validate a raw (JSON-decoded) table and build a ResultTable.

    Args:
        raw: Mapping of dataset -> window -> {"accuracy", "pruned", "times"}.
        registry: Bound registry that raw arrays are positionally aligned to.

    Returns:
        A ResultTable with bound-keyed metrics.

    Raises:
        ResultTableError: If the raw value is not a well-formed Result Table.

    Notes:
        A cell that is null or carries none of the metric fields is treated as
        absent, but its window key is kept. Cells may omit individual fields;
        those read as 0.
    """

    if not isinstance(raw, Mapping):
        raise ResultTableError(f"Result table must be a mapping, got {type(raw).__name__}.")

    datasets: dict[str, Mapping[str, MetricsCell | None]] = {}
    for dataset, raw_windows in raw.items():
        if not isinstance(dataset, str):
            raise ResultTableError(f"Dataset keys must be strings, got {dataset!r}.")
        if not isinstance(raw_windows, Mapping):
            raise ResultTableError(f"Dataset {dataset!r} must map window keys to cells.")

        windows: dict[str, MetricsCell | None] = {}
        for window, raw_cell in raw_windows.items():
            if not isinstance(window, str):
                raise ResultTableError(f"Window keys must be strings, got {window!r} in {dataset!r}.")
            windows[window] = _parse_cell(raw_cell, registry=registry, where=f"{dataset}/{window}")
        datasets[dataset] = MappingProxyType(windows)

    return ResultTable(datasets=MappingProxyType(datasets), registry=registry)


def _parse_cell(raw_cell: object, *, registry: BoundRegistry, where: str) -> MetricsCell | None:
    """Parse one raw cell, returning None when it holds no metrics."""

    if raw_cell is None:
        return None
    if not isinstance(raw_cell, Mapping):
        raise ResultTableError(f"Cell {where} must be a mapping of metric arrays.")

    arrays: dict[str, tuple[float, ...]] = {}
    for field in METRIC_FIELDS:
        values = raw_cell.get(field)
        if values is None:
            continue
        arrays[field] = _parse_metric_array(values, field=field, registry=registry, where=where)

    if not arrays:
        return None

    zeros = (0.0,) * len(registry)
    accuracy = arrays.get("accuracy", zeros)
    pruned = arrays.get("pruned", zeros)
    times = arrays.get("times", zeros)
    metrics = {
        bound.name: BoundMetrics(
            accuracy=accuracy[bound.index],
            pruned=pruned[bound.index],
            time=times[bound.index],
        )
        for bound in registry
    }
    return MetricsCell(metrics=MappingProxyType(metrics), fields=frozenset(arrays))


def _parse_metric_array(
    values: object,
    *,
    field: str,
    registry: BoundRegistry,
    where: str,
) -> tuple[float, ...]:
    """Validate one positional metric array against the registry."""

    if not isinstance(values, (list, tuple)):
        raise ResultTableError(f"{where}: {field!r} must be a list of numbers.")
    if len(values) != len(registry):
        raise ResultTableError(
            f"{where}: {field!r} has {len(values)} values, expected {len(registry)} "
            f"(one per bound)."
        )

    parsed: list[float] = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ResultTableError(f"{where}: {field!r} contains a non-numeric value {value!r}.")
        try:
            number = float(value)
        except OverflowError as exc:
            raise ResultTableError(f"{where}: {field!r} value is out of range.") from exc
        if not math.isfinite(number):
            raise ResultTableError(f"{where}: {field!r} contains a non-finite value {value!r}.")
        if number < 0:
            raise ResultTableError(f"{where}: {field!r} contains a negative value {value!r}.")
        if field == "accuracy" and number > 1:
            raise ResultTableError(f"{where}: accuracy {value!r} is outside [0, 1].")
        parsed.append(number)
    return tuple(parsed)


def window_sort_key(window: str) -> tuple[int, float, str]:
    """Sort key ordering window identifiers by their embedded number.

    "w2" sorts before "w10". Identifiers without a number sort after numbered
    ones, alphabetically.
    """

    match = _WINDOW_NUMBER_RE.search(window)
    if match is None:
        return (1, 0.0, window)
    return (0, float(match.group(0)), window)


def window_label(window: str) -> str:
    """Return a display label for a window key ("w5" -> "5")."""

    stripped = _WINDOW_PREFIX_RE.sub("", window)
    return stripped or window


def dataset_keys(table: ResultTable) -> tuple[str, ...]:
    """Return dataset names in sorted order."""

    return tuple(sorted(table.datasets))


def window_keys(table: ResultTable, dataset: str) -> tuple[str, ...]:
    """Return window keys for a dataset in numeric order (empty when unknown)."""

    windows = table.datasets.get(dataset)
    if windows is None:
        return ()
    return tuple(sorted(windows, key=window_sort_key))


def all_window_keys(table: ResultTable) -> tuple[str, ...]:
    """Return the numeric-ordered union of window keys across all datasets."""

    observed: set[str] = set()
    for windows in table.datasets.values():
        observed.update(windows)
    return tuple(sorted(observed, key=window_sort_key))


def get_cell(table: ResultTable, dataset: str | None, window: str | None) -> MetricsCell | None:
    """Return the cell for (dataset, window), or None when there is no data."""

    if dataset is None or window is None:
        return None
    windows = table.datasets.get(dataset)
    if windows is None:
        return None
    return windows.get(window)


def iter_cells(table: ResultTable) -> Iterator[tuple[str, str, MetricsCell]]:
    """Yield (dataset, window, cell) for every present cell in sorted order."""

    for dataset in dataset_keys(table):
        for window in window_keys(table, dataset):
            cell = table.datasets[dataset][window]
            if cell is not None:
                yield dataset, window, cell
