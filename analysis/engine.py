"""Orchestration entry points for the Analysis Engine.

Each view function maps an immutable ResultTable (plus selector keys) to a
freshly built DTO. Nothing here performs I/O or keeps state between calls, so
views can be recomputed on demand whenever the selection or table changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .aggregations import best_bound, best_summary, mean_pruned, rank_summaries, safe_mean, summarize_bounds
from .bounds import BoundRegistry
from .context import NavigationContext, ViewMode
from .dto import (
    AllWindowsView,
    BoundSeries,
    BoundValues,
    ComparisonView,
    GlobalStats,
    GlobalView,
    HeatmapMatrix,
    NoData,
    SingleView,
    WinDistribution,
    WindowBest,
)
from .results import (
    BoundMetrics,
    MetricsCell,
    ResultTable,
    all_window_keys,
    dataset_keys,
    get_cell,
    iter_cells,
    window_keys,
)

logger = logging.getLogger(__name__)

NO_DATA_FOR_SELECTION = "No data for this selection."

AnalysisView = SingleView | AllWindowsView | ComparisonView | GlobalView


def single_view(table: ResultTable, *, dataset: str, window: str) -> SingleView | NoData:
    """Reshape one cell into per-bound values plus the dataset's pruned trend.

    Args:
        table: Result Table snapshot.
        dataset: Selected dataset key.
        window: Selected window key.

    Returns:
        SingleView for the cell, or NoData when the cell does not exist.
    """

    cell = get_cell(table, dataset, window)
    if cell is None:
        logger.debug("No cell for dataset=%r window=%r", dataset, window)
        return NoData(reason=NO_DATA_FOR_SELECTION, dataset=dataset, window=window)

    registry = table.registry
    values = tuple(
        BoundValues(
            bound=bound.name,
            accuracy=cell.for_bound(bound.name).accuracy,
            pruned=cell.for_bound(bound.name).pruned,
            time=cell.for_bound(bound.name).time,
        )
        for bound in registry
    )
    trend_windows = window_keys(table, dataset)
    return SingleView(
        dataset=dataset,
        window=window,
        values=values,
        trend_windows=trend_windows,
        pruned_trend=_window_series(table, dataset, trend_windows, lambda m: m.pruned),
    )


def all_windows_view(table: ResultTable, *, dataset: str) -> AllWindowsView | NoData:
    """Build evolution series and best-bound rows for every window of a dataset.

    Windows without a cell are 0 in the evolution series and omitted from the
    best-bound table.
    """

    if dataset not in table.datasets:
        logger.debug("Unknown dataset %r", dataset)
        return NoData(reason=NO_DATA_FOR_SELECTION, dataset=dataset)

    registry = table.registry
    windows = window_keys(table, dataset)
    best_rows: list[WindowBest] = []
    for window in windows:
        cell = get_cell(table, dataset, window)
        if cell is None:
            continue
        winner = best_bound(cell, registry)
        if winner is None:
            continue
        metrics = cell.for_bound(winner.name)
        best_rows.append(
            WindowBest(
                window=window,
                bound=winner.name,
                pruned=metrics.pruned,
                accuracy=metrics.accuracy,
            )
        )

    return AllWindowsView(
        dataset=dataset,
        windows=windows,
        accuracy=_window_series(table, dataset, windows, lambda m: m.accuracy),
        pruned=_window_series(table, dataset, windows, lambda m: m.pruned),
        times=_window_series(table, dataset, windows, lambda m: m.time),
        best_by_window=tuple(best_rows),
    )


def comparison_view(table: ResultTable, *, window: str) -> ComparisonView:
    """Average every bound over the datasets that have data for one window.

    With no contributing dataset all means are 0 and there is no best bound.
    """

    registry = table.registry
    datasets = dataset_keys(table)
    cells: list[MetricsCell] = []
    for dataset in datasets:
        cell = get_cell(table, dataset, window)
        if cell is not None:
            cells.append(cell)
    if not cells:
        logger.debug("No dataset has data for window %r", window)

    summaries = summarize_bounds(cells, registry)
    pruned_by_dataset = tuple(
        BoundSeries(
            bound=bound.name,
            values=tuple(
                _cell_value(get_cell(table, dataset, window), bound.name, lambda m: m.pruned)
                for dataset in datasets
            ),
        )
        for bound in registry
    )
    return ComparisonView(
        window=window,
        datasets=datasets,
        contributing=len(cells),
        summaries=summaries,
        ranking=rank_summaries(summaries, "pruned"),
        best_accuracy=best_summary(summaries, "accuracy"),
        pruned_by_dataset=pruned_by_dataset,
    )


def global_view(table: ResultTable) -> GlobalView:
    """Aggregate every (dataset, window) cell of the table.

    Returns:
        GlobalView with the pruned ranking, independent best-accuracy and
        fastest picks, the mean-pruned heatmap, win counts, and the mean pruned
        per window across datasets.
    """

    registry = table.registry
    datasets = dataset_keys(table)
    windows = all_window_keys(table)
    cells = [cell for _, _, cell in iter_cells(table)]

    summaries = summarize_bounds(cells, registry)
    return GlobalView(
        stats=GlobalStats(
            dataset_count=len(datasets),
            window_count=len(windows),
            bound_count=len(registry),
            cell_count=len(cells),
        ),
        summaries=summaries,
        ranking=rank_summaries(summaries, "pruned"),
        best_accuracy=best_summary(summaries, "accuracy"),
        fastest=best_summary(summaries, "time"),
        heatmap=build_heatmap(table, datasets=datasets, windows=windows),
        wins=win_distribution(table),
        efficiency_by_window=_efficiency_by_window(
            table,
            datasets=datasets,
            windows=windows,
            registry=registry,
        ),
    )


def build_heatmap(
    table: ResultTable,
    *,
    datasets: tuple[str, ...] | None = None,
    windows: tuple[str, ...] | None = None,
) -> HeatmapMatrix:
    """Build the dataset x window matrix of mean pruned counts.

    Columns are the union of windows across datasets, so the matrix stays
    rectangular; missing cells are 0.
    """

    if datasets is None:
        datasets = dataset_keys(table)
    if windows is None:
        windows = all_window_keys(table)

    rows = tuple(
        tuple(mean_pruned(get_cell(table, dataset, window), table.registry) for window in windows)
        for dataset in datasets
    )
    maximum = max((value for row in rows for value in row), default=0.0)
    return HeatmapMatrix(datasets=datasets, windows=windows, values=rows, maximum=maximum)


def win_distribution(table: ResultTable) -> WinDistribution:
    """Count, per bound, the cells where it had the highest pruned count.

    Ties go to the lowest registry index; bounds that never win report 0.
    """

    counts = {bound.name: 0 for bound in table.registry}
    for _, _, cell in iter_cells(table):
        winner = best_bound(cell, table.registry)
        if winner is not None:
            counts[winner.name] += 1
    return WinDistribution(wins=tuple((bound.name, counts[bound.name]) for bound in table.registry))


def analyze(table: ResultTable, context: NavigationContext) -> AnalysisView | NoData:
    """Compute the view selected by a NavigationContext.

    Args:
        table: Result Table snapshot.
        context: Explicit view mode and selector keys.

    Returns:
        The DTO for the selected mode, or NoData when a required selector is
        missing or does not match any data.
    """

    if context.mode == ViewMode.global_:
        return global_view(table)

    if context.mode == ViewMode.comparison:
        if context.window is None:
            return NoData(reason=NO_DATA_FOR_SELECTION)
        return comparison_view(table, window=context.window)

    if context.dataset is None:
        return NoData(reason=NO_DATA_FOR_SELECTION, window=context.window)

    if context.mode == ViewMode.all_windows:
        return all_windows_view(table, dataset=context.dataset)

    if context.window is None:
        return NoData(reason=NO_DATA_FOR_SELECTION, dataset=context.dataset)
    return single_view(table, dataset=context.dataset, window=context.window)


def _cell_value(
    cell: MetricsCell | None,
    bound: str,
    getter: Callable[[BoundMetrics], float],
) -> float:
    """Read one metric from a cell, treating a missing cell as 0."""

    if cell is None:
        return 0.0
    return getter(cell.for_bound(bound))


def _window_series(
    table: ResultTable,
    dataset: str,
    windows: tuple[str, ...],
    getter: Callable[[BoundMetrics], float],
) -> tuple[BoundSeries, ...]:
    """Build one zero-filled series per bound across a dataset's windows."""

    return tuple(
        BoundSeries(
            bound=bound.name,
            values=tuple(
                _cell_value(get_cell(table, dataset, window), bound.name, getter)
                for window in windows
            ),
        )
        for bound in table.registry
    )


def _efficiency_by_window(
    table: ResultTable,
    *,
    datasets: tuple[str, ...],
    windows: tuple[str, ...],
    registry: BoundRegistry,
) -> tuple[BoundSeries, ...]:
    """Mean pruned per bound per window over datasets that report pruned counts."""

    series: list[BoundSeries] = []
    for bound in registry:
        values: list[float] = []
        for window in windows:
            total = 0.0
            count = 0
            for dataset in datasets:
                cell = get_cell(table, dataset, window)
                if cell is None or not cell.has_pruned:
                    continue
                total += cell.for_bound(bound.name).pruned
                count += 1
            values.append(safe_mean(total, count))
        series.append(BoundSeries(bound=bound.name, values=tuple(values)))
    return tuple(series)
