"""Integration tests for the bounds_report management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

pytestmark = pytest.mark.integration


def _run(*args: str) -> str:
    out = StringIO()
    call_command("bounds_report", *args, stdout=out)
    return out.getvalue()


def test_global_report_lists_ranking_and_wins(results_file) -> None:
    """The default mode prints the global ranking and win counts."""

    output = _run()

    assert output.startswith("[global] datasets=2 windows=2 tests=4 cells=3")
    assert "1. Webb" in output
    assert "fastest: Webb" in output
    assert "wins: None=0, Keogh=0, Improved=0, Enhanced(5)=0, Petitjean=2, Webb=1 (total=3)" in output


def test_all_windows_report_prints_best_bounds(results_file) -> None:
    """The all-windows mode prints one best-bound row per window."""

    output = _run("--mode", "all_windows", "--dataset", "GunPoint")

    assert "best=Petitjean" in output
    assert "best=Webb" in output


def test_individual_report_selection_miss(results_file) -> None:
    """A missing cell prints the empty-state message instead of failing."""

    output = _run("--mode", "individual", "--dataset", "ECG200", "--window", "w10")
    assert "No data for this selection." in output


def test_comparison_report_uses_explicit_path(results_file) -> None:
    """--path overrides the configured results file."""

    output = _run("--mode", "comparison", "--window", "w1", "--path", str(results_file))
    assert output.startswith("[comparison] window=w1 datasets=2")


def test_missing_selectors_are_rejected(results_file) -> None:
    """Modes that need a dataset or window refuse to guess."""

    with pytest.raises(CommandError):
        _run("--mode", "individual", "--dataset", "GunPoint")
    with pytest.raises(CommandError):
        _run("--mode", "all_windows")


def test_load_failure_is_command_error(tmp_path) -> None:
    """An unreadable results file surfaces as CommandError."""

    with pytest.raises(CommandError):
        _run("--path", str(tmp_path / "missing.json"))


def test_empty_results_file_reports_no_datasets(tmp_path) -> None:
    """A table without datasets prints a notice instead of zeroed rankings."""

    path = tmp_path / "results.json"
    path.write_text("{}", encoding="utf-8")

    output = _run("--path", str(path))
    assert output.strip() == "[global] No datasets loaded."


def test_out_of_range_values_are_command_error(tmp_path) -> None:
    """A number too large for a float surfaces as CommandError."""

    path = tmp_path / "results.json"
    path.write_text('{"DS1": {"w1": {"pruned": [1' + "0" * 400 + ", 1, 1, 1, 1, 1]}}}", encoding="utf-8")

    with pytest.raises(CommandError, match="out of range"):
        _run("--path", str(path))
