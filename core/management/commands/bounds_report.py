"""Print bound rankings and best-bound tables from the benchmark results."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from analysis.context import NavigationContext, ViewMode
from analysis.dto import AllWindowsView, BoundSummary, ComparisonView, GlobalView, NoData, SingleView
from analysis.engine import analyze
from core.results_loader import ResultsLoadError, load_result_table


class Command(BaseCommand):
    """Render one Analysis Engine view as a plain-text report."""

    help = "Print bound rankings for one view mode (individual, all_windows, comparison, global)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--mode",
            choices=[mode.value for mode in ViewMode],
            default=ViewMode.global_.value,
            help="View mode to report (default: global).",
        )
        parser.add_argument("--dataset", default=None, help="Dataset key (individual, all_windows).")
        parser.add_argument("--window", default=None, help="Window key (individual, comparison).")
        parser.add_argument(
            "--path",
            default=None,
            help="Results JSON file (default: settings.BOUNDS_RESULTS_PATH).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        mode = ViewMode(options["mode"])
        dataset: str | None = options["dataset"]
        window: str | None = options["window"]

        if mode in (ViewMode.individual, ViewMode.all_windows) and dataset is None:
            raise CommandError(f"--dataset is required for mode {mode.value!r}.")
        if mode in (ViewMode.individual, ViewMode.comparison) and window is None:
            raise CommandError(f"--window is required for mode {mode.value!r}.")

        try:
            table = load_result_table(options["path"])
        except ResultsLoadError as exc:
            raise CommandError(str(exc)) from exc

        if table.is_empty:
            self.stdout.write(f"[{mode.value}] No datasets loaded.")
            return None

        view = analyze(table, NavigationContext(mode=mode, dataset=dataset, window=window))
        if isinstance(view, NoData):
            self.stdout.write(f"[{mode.value}] {view.reason}")
            return None
        if isinstance(view, SingleView):
            self._write_single(view)
        elif isinstance(view, AllWindowsView):
            self._write_all_windows(view)
        elif isinstance(view, ComparisonView):
            self._write_comparison(view)
        else:
            self._write_global(view)
        return None

    def _write_single(self, view: SingleView) -> None:
        self.stdout.write(f"[individual] dataset={view.dataset} window={view.window}")
        for values in view.values:
            self.stdout.write(
                f"  {values.bound:<14} pruned={values.pruned:.0f} "
                f"accuracy={values.accuracy:.4f} time={values.time:.2f}ms"
            )

    def _write_all_windows(self, view: AllWindowsView) -> None:
        self.stdout.write(f"[all_windows] dataset={view.dataset} windows={len(view.windows)}")
        for row in view.best_by_window:
            self.stdout.write(
                f"  {row.window:<8} best={row.bound:<14} pruned={row.pruned:.0f} accuracy={row.accuracy:.4f}"
            )

    def _write_comparison(self, view: ComparisonView) -> None:
        self.stdout.write(f"[comparison] window={view.window} datasets={view.contributing}")
        self._write_ranking(view.ranking.entries)
        if view.best_accuracy is not None:
            self.stdout.write(f"  best accuracy: {view.best_accuracy.bound}")

    def _write_global(self, view: GlobalView) -> None:
        stats = view.stats
        self.stdout.write(
            f"[global] datasets={stats.dataset_count} windows={stats.window_count} "
            f"tests={stats.total_tests} cells={stats.cell_count}"
        )
        self._write_ranking(view.ranking.entries)
        if view.best_accuracy is not None:
            self.stdout.write(f"  best accuracy: {view.best_accuracy.bound}")
        if view.fastest is not None:
            self.stdout.write(f"  fastest: {view.fastest.bound}")
        wins = ", ".join(f"{bound}={count}" for bound, count in view.wins.wins)
        self.stdout.write(f"  wins: {wins} (total={view.wins.total})")

    def _write_ranking(self, entries: tuple[BoundSummary, ...]) -> None:
        for position, summary in enumerate(entries, start=1):
            self.stdout.write(
                f"  {position}. {summary.bound:<14} pruned={summary.avg_pruned:.2f} "
                f"accuracy={summary.avg_accuracy:.4f} time={summary.avg_time:.2f}ms "
                f"n={summary.sample_count}"
            )
