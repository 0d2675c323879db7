"""
Report sink: persists benchmark results as flat CSV tables.

One file per (distribution, engine) combination:
    results_merge_<dist>.csv
    results_hybrid_<dist>_th<threshold>.csv

Each file holds the header `size,time_<unit>` (`size,time_ms` by default)
followed by one row per result in sweep order. A failed write is logged and
that combination is skipped; it never aborts the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd
from rich.console import Console
from rich.table import Table

from mergebench.algorithms import EngineKind, EngineSpec
from mergebench.bench.measure import BenchmarkResult
from mergebench.datasets import DistributionKind

__all__ = ["CsvReportSink", "result_filename", "SUMMARY_COLUMNS"]

log = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["distribution", "engine", "threshold", "size", "avg_duration"]


def result_filename(distribution: Union[DistributionKind, str], engine: EngineSpec) -> str:
    dist = DistributionKind(distribution).value
    if engine.kind is EngineKind.STANDARD:
        return f"results_merge_{dist}.csv"
    return f"results_hybrid_{dist}_th{engine.threshold}.csv"


class CsvReportSink:
    """
    Writes result tables under `run_dir` and optionally echoes them to the console.

    Every emitted combination is also kept in memory so a combined summary
    can be written at the end of the run.
    """

    def __init__(
        self,
        run_dir: Path,
        *,
        time_unit: str = "ms",
        echo: bool = True,
        console: Optional[Console] = None,
    ) -> None:
        self.run_dir = Path(run_dir)
        self.time_unit = time_unit
        self.echo = echo
        self.console = console or Console()
        self.rows: List[Dict[str, Any]] = []
        self.failed: List[str] = []

    @property
    def time_column(self) -> str:
        return f"time_{self.time_unit}"

    def emit(
        self,
        distribution: Union[DistributionKind, str],
        engine: EngineSpec,
        results: Sequence[BenchmarkResult],
    ) -> Optional[Path]:
        """Write one combination. Returns the file path, or None if the write failed."""
        dist = DistributionKind(distribution)
        path = self.run_dir / result_filename(dist, engine)
        df = pd.DataFrame(
            {
                "size": [r.size for r in results],
                self.time_column: [r.avg_duration for r in results],
            },
            columns=["size", self.time_column],
        )
        try:
            df.to_csv(path, index=False)
        except OSError as e:
            log.error("cannot write %s: %s; skipping %s/%s", path, e, dist.value, engine.label)
            self.failed.append(path.name)
            return None

        for r in results:
            self.rows.append(
                {
                    "distribution": dist.value,
                    "engine": engine.kind.value,
                    "threshold": engine.threshold,
                    "size": r.size,
                    "avg_duration": r.avg_duration,
                }
            )

        if self.echo:
            self._print_results(dist, engine, results, path)
        return path

    def summary_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.rows, columns=SUMMARY_COLUMNS)
        # nullable ints keep the standard engine's missing threshold as <NA>
        df["threshold"] = df["threshold"].astype("Int64")
        return df.rename(columns={"avg_duration": f"avg_{self.time_unit}"})

    def write_summary(self, path: Optional[Path] = None) -> Optional[Path]:
        path = Path(path) if path is not None else self.run_dir / "summary.csv"
        try:
            self.summary_frame().to_csv(path, index=False)
        except OSError as e:
            log.error("cannot write summary %s: %s", path, e)
            return None
        return path

    def _print_results(
        self,
        dist: DistributionKind,
        engine: EngineSpec,
        results: Sequence[BenchmarkResult],
        path: Path,
    ) -> None:
        table = Table(title=f"{engine.label} / {dist.value}")
        table.add_column("Size", justify="right")
        table.add_column(f"Avg time ({self.time_unit})", justify="right")
        for r in _pick_rows(results):
            table.add_row(str(r.size), str(r.avg_duration))
        self.console.print(table)
        self.console.print(f"Saved to {path}")


def _pick_rows(results: Sequence[BenchmarkResult], limit: int = 12) -> List[BenchmarkResult]:
    """Evenly spaced subset of `results` (always including the last row) for display."""
    n = len(results)
    if n <= limit:
        return list(results)
    stride = -(-n // (limit - 1))
    picked = list(results[::stride])
    if picked[-1] is not results[-1]:
        picked.append(results[-1])
    return picked
