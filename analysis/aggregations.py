"""Aggregation helpers for the Analysis Engine.

This module provides deterministic, reusable aggregation functions shared by
the view builders in `analysis.engine`. Every helper is pure: inputs are never
mutated and each call returns fresh values.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from .bounds import BoundDefinition, BoundRegistry
from .dto import BoundSummary, RankMetric, Ranking
from .results import MetricsCell

HIGHER_IS_BETTER: Final[dict[RankMetric, bool]] = {
    "pruned": True,
    "accuracy": True,
    "time": False,
}


def safe_mean(total: float, count: int) -> float:
    """Return `total / count`, or 0.0 when there are no samples."""

    if count <= 0:
        return 0.0
    return total / count


def summarize_bounds(
    cells: Iterable[MetricsCell],
    registry: BoundRegistry,
) -> tuple[BoundSummary, ...]:
    """Average each bound's metrics over a set of cells.

    Args:
        cells: Present cells to aggregate. Missing fields within a cell count
            as 0 but the cell still contributes a sample.
        registry: Bound registry defining which summaries are produced.

    Returns:
        One BoundSummary per bound, in registry order. With no cells every
        mean is 0 and `sample_count` is 0.
    """

    selected = tuple(cells)
    count = len(selected)
    summaries: list[BoundSummary] = []
    for bound in registry:
        total_pruned = 0.0
        total_accuracy = 0.0
        total_time = 0.0
        for cell in selected:
            metrics = cell.for_bound(bound.name)
            total_pruned += metrics.pruned
            total_accuracy += metrics.accuracy
            total_time += metrics.time
        summaries.append(
            BoundSummary(
                bound=bound.name,
                avg_pruned=safe_mean(total_pruned, count),
                avg_accuracy=safe_mean(total_accuracy, count),
                avg_time=safe_mean(total_time, count),
                sample_count=count,
            )
        )
    return tuple(summaries)


def rank_summaries(summaries: Sequence[BoundSummary], metric: RankMetric) -> Ranking:
    """Order summaries by a metric without mutating the input.

    Pruned and accuracy rank descending, time ascending. The sort is stable,
    so ties keep the input (registry) order.
    """

    descending = HIGHER_IS_BETTER[metric]
    if descending:
        ordered = sorted(summaries, key=lambda s: -s.value(metric))
    else:
        ordered = sorted(summaries, key=lambda s: s.value(metric))
    return Ranking(metric=metric, descending=descending, entries=tuple(ordered))


def best_summary(summaries: Sequence[BoundSummary], metric: RankMetric) -> BoundSummary | None:
    """Return the top summary for a metric, or None when nothing was sampled."""

    return rank_summaries(summaries, metric).best


def best_bound(cell: MetricsCell, registry: BoundRegistry) -> BoundDefinition | None:
    """Return the bound with the highest pruned count in a cell.

    Ties go to the lowest registry index. Cells without pruned counts have no
    winner.
    """

    if not cell.has_pruned:
        return None

    winner: BoundDefinition | None = None
    top = 0.0
    for bound in registry:
        pruned = cell.for_bound(bound.name).pruned
        if winner is None or pruned > top:
            winner = bound
            top = pruned
    return winner


def mean_pruned(cell: MetricsCell | None, registry: BoundRegistry) -> float:
    """Mean pruned count across all bounds of a cell (0 when absent)."""

    if cell is None or not cell.has_pruned:
        return 0.0
    total = sum(cell.for_bound(bound.name).pruned for bound in registry)
    return safe_mean(total, len(registry))
