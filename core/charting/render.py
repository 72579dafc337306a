"""Chart.js rendering for Analysis Engine views.

This is the presentation boundary: bound-keyed DTOs are converted into
positional arrays aligned to the Bound Registry, with one color per bound.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

from analysis.bounds import BoundRegistry
from analysis.context import ViewMode
from analysis.dto import (
    AllWindowsView,
    BoundSeries,
    BoundSummary,
    ComparisonView,
    GlobalView,
    HeatmapMatrix,
    NoData,
    SingleView,
)
from analysis.engine import AnalysisView
from analysis.results import window_label

ChartType = Literal["bar", "line"]


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload."""

    label: str
    data: list[float]
    borderColor: str | list[str]
    backgroundColor: str | list[str]
    borderWidth: int
    tension: float
    fill: bool


class ChartData(TypedDict):
    """The full Chart.js payload (labels + datasets) for a chart panel."""

    labels: list[str]
    datasets: list[ChartDataset]


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A chart panel ready for the dashboard."""

    id: str
    title: str
    chart_type: ChartType
    data: ChartData
    unit: str = ""

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        return {
            "id": self.id,
            "title": self.title,
            "type": self.chart_type,
            "unit": self.unit,
            "data": self.data,
        }


@dataclass(frozen=True, slots=True)
class RenderedView:
    """Everything the dashboard needs to draw one view mode."""

    mode: ViewMode
    context: dict[str, str | None]
    charts: tuple[RenderedChart, ...] = ()
    tables: dict[str, Any] = field(default_factory=dict)
    empty_state: str | None = None

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""

        payload: dict[str, Any] = {
            "mode": str(self.mode),
            "context": self.context,
            "charts": [chart.as_json() for chart in self.charts],
            "tables": self.tables,
        }
        if self.empty_state is not None:
            payload["empty_state"] = self.empty_state
        return payload


def render_view(
    view: AnalysisView | NoData,
    *,
    mode: ViewMode,
    registry: BoundRegistry,
) -> RenderedView:
    """Render any engine view (or an empty state) into chart payloads."""

    if isinstance(view, NoData):
        return RenderedView(
            mode=mode,
            context={"dataset": view.dataset, "window": view.window},
            empty_state=view.reason,
        )
    if isinstance(view, SingleView):
        return render_single(view, registry=registry)
    if isinstance(view, AllWindowsView):
        return render_all_windows(view, registry=registry)
    if isinstance(view, ComparisonView):
        return render_comparison(view, registry=registry)
    return render_global(view, registry=registry)


def render_single(view: SingleView, *, registry: BoundRegistry) -> RenderedView:
    """Render the per-cell bar charts and the pruned-by-window trend."""

    by_bound = {values.bound: values for values in view.values}
    accuracy = [by_bound[name].accuracy for name in registry.names]
    pruned = [by_bound[name].pruned for name in registry.names]
    times = [by_bound[name].time for name in registry.names]

    charts = (
        _bound_bar_chart("accuracy", "Accuracy by bound", "Accuracy", accuracy, registry=registry, unit="fraction"),
        _bound_bar_chart("pruned", "Pruned computations (efficiency)", "Pruned", pruned, registry=registry),
        _bound_bar_chart("times", "Execution time", "Time (ms)", times, registry=registry, unit="ms"),
        _series_chart(
            "pruned_trend",
            "Efficiency by window",
            "line",
            labels=[window_label(window) for window in view.trend_windows],
            series=view.pruned_trend,
            registry=registry,
        ),
    )
    return RenderedView(
        mode=ViewMode.individual,
        context={"dataset": view.dataset, "window": view.window},
        charts=charts,
    )


def render_all_windows(view: AllWindowsView, *, registry: BoundRegistry) -> RenderedView:
    """Render evolution charts and the best-bound-per-window table."""

    labels = [window_label(window) for window in view.windows]
    charts = (
        _series_chart(
            "accuracy_evolution",
            "Accuracy evolution",
            "line",
            labels=labels,
            series=view.accuracy,
            registry=registry,
            fill=True,
        ),
        _series_chart(
            "pruned_evolution",
            "Pruned evolution",
            "line",
            labels=labels,
            series=view.pruned,
            registry=registry,
            fill=True,
        ),
        _series_chart(
            "times_evolution",
            "Time evolution",
            "line",
            labels=labels,
            series=view.times,
            registry=registry,
            fill=True,
            unit="ms",
        ),
        _series_chart(
            "pruned_by_window",
            "Pruned by window",
            "bar",
            labels=labels,
            series=view.pruned,
            registry=registry,
        ),
    )
    best_rows = [
        {
            "window": row.window,
            "label": window_label(row.window),
            "bound": row.bound,
            "pruned": row.pruned,
            "accuracy": row.accuracy,
        }
        for row in view.best_by_window
    ]
    return RenderedView(
        mode=ViewMode.all_windows,
        context={"dataset": view.dataset, "window": None},
        charts=charts,
        tables={
            "best_by_window": best_rows,
            "stats": {"windows": len(view.windows), "bounds": len(registry)},
        },
    )


def render_comparison(view: ComparisonView, *, registry: BoundRegistry) -> RenderedView:
    """Render cross-dataset means, the pruned ranking, and grouped bars."""

    by_bound = {summary.bound: summary for summary in view.summaries}
    charts = (
        _bound_bar_chart(
            "avg_accuracy",
            "Mean accuracy by bound",
            "Mean accuracy",
            [by_bound[name].avg_accuracy for name in registry.names],
            registry=registry,
            unit="fraction",
        ),
        _bound_bar_chart(
            "avg_pruned",
            "Mean pruned by bound",
            "Mean pruned",
            [by_bound[name].avg_pruned for name in registry.names],
            registry=registry,
        ),
        _bound_bar_chart(
            "avg_times",
            "Mean time by bound",
            "Mean time (ms)",
            [by_bound[name].avg_time for name in registry.names],
            registry=registry,
            unit="ms",
        ),
        _series_chart(
            "pruned_by_dataset",
            "Pruned by dataset",
            "bar",
            labels=list(view.datasets),
            series=view.pruned_by_dataset,
            registry=registry,
        ),
    )
    return RenderedView(
        mode=ViewMode.comparison,
        context={"dataset": None, "window": view.window},
        charts=charts,
        tables={
            "ranking": [summary_json(summary) for summary in view.ranking.entries],
            "best_accuracy": summary_json(view.best_accuracy) if view.best_accuracy else None,
            "contributing_datasets": view.contributing,
        },
    )


def render_global(view: GlobalView, *, registry: BoundRegistry) -> RenderedView:
    """Render the global ranking, heatmap, win distribution, and trend."""

    labels = [window_label(window) for window in view.heatmap.windows]
    wins = view.wins.as_dict()
    charts = (
        _series_chart(
            "efficiency_by_window",
            "Mean efficiency by window",
            "line",
            labels=labels,
            series=view.efficiency_by_window,
            registry=registry,
            fill=True,
        ),
        _bound_bar_chart(
            "win_distribution",
            "Times each bound was the most efficient",
            "Wins",
            [float(wins.get(name, 0)) for name in registry.names],
            registry=registry,
        ),
    )
    return RenderedView(
        mode=ViewMode.global_,
        context={"dataset": None, "window": None},
        charts=charts,
        tables={
            "stats": {
                "total_tests": view.stats.total_tests,
                "datasets": view.stats.dataset_count,
                "windows": view.stats.window_count,
                "bounds": view.stats.bound_count,
                "cells": view.stats.cell_count,
                "decided_cells": view.wins.total,
            },
            "ranking": [summary_json(summary) for summary in view.ranking.entries],
            "best_accuracy": summary_json(view.best_accuracy) if view.best_accuracy else None,
            "fastest": summary_json(view.fastest) if view.fastest else None,
            "heatmap": heatmap_json(view.heatmap),
            "wins": wins,
        },
    )


def summary_json(summary: BoundSummary) -> dict[str, Any]:
    """Serialize a BoundSummary with dashboard field names."""

    return {
        "bound": summary.bound,
        "avgPruned": summary.avg_pruned,
        "avgAccuracy": summary.avg_accuracy,
        "avgTime": summary.avg_time,
        "sampleCount": summary.sample_count,
    }


def heatmap_json(heatmap: HeatmapMatrix) -> dict[str, Any]:
    """Serialize a HeatmapMatrix including normalized intensities."""

    return {
        "rows": list(heatmap.datasets),
        "columns": list(heatmap.windows),
        "labels": [window_label(window) for window in heatmap.windows],
        "values": [list(row) for row in heatmap.values],
        "intensity": [list(row) for row in heatmap.normalized()],
        "maximum": heatmap.maximum,
    }


def _bound_bar_chart(
    chart_id: str,
    title: str,
    label: str,
    data: list[float],
    *,
    registry: BoundRegistry,
    unit: str = "",
) -> RenderedChart:
    """Single-dataset bar chart with one bar per bound."""

    colors = list(registry.colors)
    dataset: ChartDataset = {
        "label": label,
        "data": data,
        "backgroundColor": colors,
        "borderColor": [color + "CC" for color in colors],
        "borderWidth": 2,
    }
    return RenderedChart(
        id=chart_id,
        title=title,
        chart_type="bar",
        unit=unit,
        data={"labels": list(registry.names), "datasets": [dataset]},
    )


def _series_chart(
    chart_id: str,
    title: str,
    chart_type: ChartType,
    *,
    labels: list[str],
    series: tuple[BoundSeries, ...],
    registry: BoundRegistry,
    fill: bool = False,
    unit: str = "",
) -> RenderedChart:
    """Multi-dataset chart with one dataset per bound, in registry order."""

    by_bound = {item.bound: item for item in series}
    datasets: list[ChartDataset] = []
    for bound in registry:
        item = by_bound.get(bound.name)
        values = list(item.values) if item is not None else [0.0] * len(labels)
        dataset: ChartDataset = {
            "label": bound.name,
            "data": values,
            "borderColor": bound.color,
            "backgroundColor": bound.color + ("40" if chart_type == "line" else "80"),
            "borderWidth": 3 if chart_type == "line" else 2,
        }
        if chart_type == "line":
            dataset["tension"] = 0.4 if fill else 0.3
            dataset["fill"] = fill
        datasets.append(dataset)
    return RenderedChart(
        id=chart_id,
        title=title,
        chart_type=chart_type,
        unit=unit,
        data={"labels": labels, "datasets": datasets},
    )
