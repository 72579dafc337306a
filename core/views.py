"""JSON endpoints exposing Analysis Engine views to the dashboard."""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from analysis.context import NavigationContext, ViewMode
from analysis.engine import analyze
from analysis.results import all_window_keys, dataset_keys, window_keys
from core.charting.render import render_view
from core.results_loader import ResultsLoadError, load_result_table

logger = logging.getLogger(__name__)


@require_GET
def results_index(request: HttpRequest) -> JsonResponse:
    """Return selectable datasets, windows, and the bound registry."""

    try:
        table = load_result_table()
    except ResultsLoadError as exc:
        return _load_failure(exc)

    return JsonResponse(
        {
            "empty": table.is_empty,
            "datasets": list(dataset_keys(table)),
            "windows": list(all_window_keys(table)),
            "windows_by_dataset": {
                dataset: list(window_keys(table, dataset)) for dataset in dataset_keys(table)
            },
            "bounds": [
                {"index": bound.index, "name": bound.name, "color": bound.color}
                for bound in table.registry
            ],
        }
    )


@require_GET
def individual_view(request: HttpRequest) -> JsonResponse:
    """Return charts for one dataset at one window."""

    dataset = _query_param(request, "dataset")
    window = _query_param(request, "window")
    if dataset is None or window is None:
        return _bad_request("Both 'dataset' and 'window' are required.")
    return _render(NavigationContext(mode=ViewMode.individual, dataset=dataset, window=window))


@require_GET
def all_windows_view(request: HttpRequest) -> JsonResponse:
    """Return evolution charts for every window of one dataset."""

    dataset = _query_param(request, "dataset")
    if dataset is None:
        return _bad_request("'dataset' is required.")
    return _render(NavigationContext(mode=ViewMode.all_windows, dataset=dataset))


@require_GET
def comparison_view(request: HttpRequest) -> JsonResponse:
    """Return cross-dataset means for one window."""

    window = _query_param(request, "window")
    if window is None:
        return _bad_request("'window' is required.")
    return _render(NavigationContext(mode=ViewMode.comparison, window=window))


@require_GET
def global_view(request: HttpRequest) -> JsonResponse:
    """Return the global ranking, heatmap, and win distribution."""

    return _render(NavigationContext(mode=ViewMode.global_))


def _render(context: NavigationContext) -> JsonResponse:
    """Load the table, compute the selected view, and serialize it."""

    try:
        table = load_result_table()
    except ResultsLoadError as exc:
        return _load_failure(exc)

    rendered = render_view(analyze(table, context), mode=context.mode, registry=table.registry)
    if rendered.empty_state is not None:
        logger.debug("Empty state for %s: %s", context, rendered.empty_state)
    return JsonResponse(rendered.as_json())


def _query_param(request: HttpRequest, name: str) -> str | None:
    """Return a stripped query parameter, or None when missing/blank."""

    value = (request.GET.get(name) or "").strip()
    return value or None


def _load_failure(exc: ResultsLoadError) -> JsonResponse:
    return JsonResponse({"error": str(exc)}, status=503)


def _bad_request(message: str) -> JsonResponse:
    return JsonResponse({"error": message}, status=400)
