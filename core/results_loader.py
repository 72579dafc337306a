"""Load the benchmark Result Table from its configured JSON source.

Loading happens once per request or command invocation and either yields a
complete ResultTable or raises ResultsLoadError. Retrying is left to callers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from django.conf import settings

from analysis.bounds import DEFAULT_REGISTRY, BoundRegistry
from analysis.results import ResultTable, ResultTableError, parse_result_table

logger = logging.getLogger(__name__)


class ResultsLoadError(RuntimeError):
    """Raised when the Result Table cannot be obtained."""


def configured_results_path() -> Path:
    """Return the results file path from settings."""

    return Path(settings.BOUNDS_RESULTS_PATH)


def load_result_table(
    path: Path | str | None = None,
    *,
    registry: BoundRegistry = DEFAULT_REGISTRY,
) -> ResultTable:
    """Read and validate a Result Table from a JSON file.

    Args:
        path: Optional explicit file path. Defaults to `BOUNDS_RESULTS_PATH`.
        registry: Bound registry the raw arrays are aligned to.

    Returns:
        A validated ResultTable.

    Raises:
        ResultsLoadError: If the file is missing, unreadable, not valid JSON,
            or does not describe a well-formed Result Table.
    """

    source = Path(path) if path is not None else configured_results_path()
    try:
        raw_text = source.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not read results file %s: %s", source, exc)
        raise ResultsLoadError(f"Could not read results file {source}.") from exc

    return load_result_table_from_text(raw_text, source=str(source), registry=registry)


def load_result_table_from_text(
    raw_text: str,
    *,
    source: str = "<string>",
    registry: BoundRegistry = DEFAULT_REGISTRY,
) -> ResultTable:
    """Parse a Result Table from JSON text.

    Raises:
        ResultsLoadError: If the text is not valid JSON or not a Result Table.
    """

    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.warning("Results file %s is not valid JSON: %s", source, exc)
        raise ResultsLoadError(f"Results file {source} is not valid JSON.") from exc

    try:
        table = parse_result_table(raw, registry=registry)
    except ResultTableError as exc:
        logger.warning("Results file %s is malformed: %s", source, exc)
        raise ResultsLoadError(f"Results file {source} is malformed: {exc}") from exc

    logger.info("Loaded %d datasets from %s", len(table.datasets), source)
    return table
