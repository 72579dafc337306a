"""Navigation context passed into the Analysis Engine.

The selected view mode, dataset, and window are explicit inputs rather than
ambient UI state. The presentation layer builds a NavigationContext for each
request; the engine never falls back to hidden defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ViewMode(StrEnum):
    """Aggregation mode selected by the caller."""

    individual = "individual"
    all_windows = "all_windows"
    comparison = "comparison"
    global_ = "global"


@dataclass(frozen=True, slots=True)
class NavigationContext:
    """Immutable selection used to pick and scope a view.

    Args:
        mode: Which view to compute.
        dataset: Dataset key (individual and all-windows views).
        window: Window key (individual and comparison views).
    """

    mode: ViewMode
    dataset: str | None = None
    window: str | None = None
