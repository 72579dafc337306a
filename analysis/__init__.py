"""Pure analysis package for boundStats.

This package contains deterministic, testable aggregations that operate on an
in-memory Result Table and return DTOs. It must not import Django or perform
any I/O.
"""

from .engine import analyze, all_windows_view, comparison_view, global_view, single_view
from .results import ResultTable, ResultTableError, parse_result_table

__all__ = [
    "ResultTable",
    "ResultTableError",
    "all_windows_view",
    "analyze",
    "comparison_view",
    "global_view",
    "parse_result_table",
    "single_view",
]
