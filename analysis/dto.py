"""DTO types returned by the Analysis Engine.

DTOs are plain, immutable data containers used to transport aggregation
results to the presentation layer. Per-bound values are always labelled with
the bound name; positional arrays are only produced by the chart renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RankMetric = Literal["pruned", "accuracy", "time"]


@dataclass(frozen=True, slots=True)
class NoData:
    """Explicit "no data for this selection" result.

    Attributes:
        reason: Human-readable explanation for the empty state.
        dataset: Dataset key that was requested, if any.
        window: Window key that was requested, if any.
    """

    reason: str
    dataset: str | None = None
    window: str | None = None


@dataclass(frozen=True, slots=True)
class BoundSummary:
    """Per-bound averages over a selected set of cells.

    Attributes:
        bound: Bound name.
        avg_pruned: Mean pruned count.
        avg_accuracy: Mean accuracy.
        avg_time: Mean elapsed time (ms).
        sample_count: Number of cells contributing to the means.
    """

    bound: str
    avg_pruned: float
    avg_accuracy: float
    avg_time: float
    sample_count: int

    def value(self, metric: RankMetric) -> float:
        """Return the average for a ranking metric."""

        if metric == "pruned":
            return self.avg_pruned
        if metric == "accuracy":
            return self.avg_accuracy
        return self.avg_time


@dataclass(frozen=True, slots=True)
class Ranking:
    """BoundSummary entries ordered by one metric.

    Attributes:
        metric: Metric used for ordering.
        descending: True when higher values rank first.
        entries: Ordered summaries; ties keep registry order.
    """

    metric: RankMetric
    descending: bool
    entries: tuple[BoundSummary, ...] = ()

    @property
    def best(self) -> BoundSummary | None:
        """Top-ranked entry, or None when nothing contributed samples."""

        if not self.entries or self.entries[0].sample_count == 0:
            return None
        return self.entries[0]


@dataclass(frozen=True, slots=True)
class BoundValues:
    """Raw metrics of one bound within a single cell."""

    bound: str
    accuracy: float
    pruned: float
    time: float


@dataclass(frozen=True, slots=True)
class BoundSeries:
    """A per-bound series aligned to a shared set of labels.

    Attributes:
        bound: Bound name.
        values: One value per label (window or dataset).
    """

    bound: str
    values: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class WindowBest:
    """The most efficient bound for one window of one dataset."""

    window: str
    bound: str
    pruned: float
    accuracy: float


@dataclass(frozen=True, slots=True)
class HeatmapMatrix:
    """Mean pruned count per (dataset, window).

    Attributes:
        datasets: Row labels.
        windows: Column labels, numeric order.
        values: Rows of cell values; missing cells are 0.
        maximum: Largest value in the matrix (0 when empty).
    """

    datasets: tuple[str, ...] = ()
    windows: tuple[str, ...] = ()
    values: tuple[tuple[float, ...], ...] = ()
    maximum: float = 0.0

    def intensity(self, value: float) -> float:
        """Normalize a value against the matrix maximum (0 when maximum is 0)."""

        if self.maximum <= 0:
            return 0.0
        return value / self.maximum

    def normalized(self) -> tuple[tuple[float, ...], ...]:
        """Return the matrix scaled to [0, 1]."""

        return tuple(tuple(self.intensity(value) for value in row) for row in self.values)


@dataclass(frozen=True, slots=True)
class WinDistribution:
    """How many cells each bound won (highest pruned count).

    Attributes:
        wins: (bound, count) pairs in registry order, including zero counts.
    """

    wins: tuple[tuple[str, int], ...] = ()

    def as_dict(self) -> dict[str, int]:
        """Return wins as a bound -> count mapping."""

        return dict(self.wins)

    @property
    def total(self) -> int:
        """Total number of cells credited to some bound."""

        return sum(count for _, count in self.wins)


@dataclass(frozen=True, slots=True)
class GlobalStats:
    """Headline counts for the global view."""

    dataset_count: int
    window_count: int
    bound_count: int
    cell_count: int

    @property
    def total_tests(self) -> int:
        """Number of (dataset, window) combinations on the global grid."""

        return self.dataset_count * self.window_count


@dataclass(frozen=True, slots=True)
class SingleView:
    """One dataset at one window.

    Attributes:
        dataset: Selected dataset.
        window: Selected window.
        values: Per-bound raw metrics for the selected cell.
        trend_windows: Windows of the dataset in numeric order.
        pruned_trend: Pruned count per bound across `trend_windows`.
    """

    dataset: str
    window: str
    values: tuple[BoundValues, ...]
    trend_windows: tuple[str, ...] = ()
    pruned_trend: tuple[BoundSeries, ...] = ()


@dataclass(frozen=True, slots=True)
class AllWindowsView:
    """Every window of one dataset."""

    dataset: str
    windows: tuple[str, ...]
    accuracy: tuple[BoundSeries, ...] = ()
    pruned: tuple[BoundSeries, ...] = ()
    times: tuple[BoundSeries, ...] = ()
    best_by_window: tuple[WindowBest, ...] = ()


@dataclass(frozen=True, slots=True)
class ComparisonView:
    """Every dataset at one window.

    Attributes:
        window: Selected window.
        datasets: All dataset names (labels of `pruned_by_dataset`).
        contributing: Number of datasets with a cell for the window.
        summaries: Per-bound means in registry order.
        ranking: Summaries ordered by mean pruned, descending.
        best_accuracy: Bound with the highest mean accuracy, if any data.
        pruned_by_dataset: Pruned per bound for each dataset (0 when missing).
    """

    window: str
    datasets: tuple[str, ...]
    contributing: int
    summaries: tuple[BoundSummary, ...]
    ranking: Ranking
    best_accuracy: BoundSummary | None = None
    pruned_by_dataset: tuple[BoundSeries, ...] = ()


@dataclass(frozen=True, slots=True)
class GlobalView:
    """All datasets across all windows.

    Attributes:
        stats: Headline counts.
        summaries: Per-bound means in registry order.
        ranking: Summaries ordered by mean pruned, descending.
        best_accuracy: Bound with the highest mean accuracy, if any data.
        fastest: Bound with the lowest mean time, if any data.
        heatmap: Mean pruned per (dataset, window).
        wins: Win counts per bound.
        efficiency_by_window: Mean pruned per bound per window across datasets.
    """

    stats: GlobalStats
    summaries: tuple[BoundSummary, ...]
    ranking: Ranking
    heatmap: HeatmapMatrix
    wins: WinDistribution
    best_accuracy: BoundSummary | None = None
    fastest: BoundSummary | None = None
    efficiency_by_window: tuple[BoundSeries, ...] = ()
