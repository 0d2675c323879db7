"""
Experiment runner: drives a full merge vs. hybrid sweep from a YAML config.

Usage (from repo root):
    python -m mergebench.bench.runner experiments/configs/merge_vs_hybrid.yaml
    mergebench experiments/configs/quick.yaml

Outputs in a new run directory:
    - config_resolved.yaml                   # the config we actually used
    - meta.json                              # python/numpy/pandas, cpu/ram, git commit
    - results_merge_<dist>.csv               # size,time_ms per standard run
    - results_hybrid_<dist>_th<t>.csv        # size,time_ms per hybrid threshold
    - summary.csv                            # every combination in one table
    - (console) rich tables + tqdm progress

Design notes:
- ONE SequenceGenerator serves the whole run; distributions are generated in
  config order, so the seed plus that order fixes every input.
- Per distribution we generate ONE maximal sequence and take its prefixes as
  the sweep. Every engine sees the same sweep.
- A combination whose CSV cannot be written is logged and skipped; the
  remaining combinations still run.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from mergebench.bench.measure import benchmark_engine
from mergebench.bench.report import CsvReportSink
from mergebench.bench.sweep import build_sweep
from mergebench.config import BenchmarkConfig, load_config
from mergebench.datasets import SequenceGenerator

log = logging.getLogger("mergebench")

_console = Console()


# ------------------------- helpers: IO & meta ------------------------- #

def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    import platform
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _print_rich_summary(summary: pd.DataFrame, time_unit: str) -> None:
    """Largest-size average per (distribution, engine)."""
    avg_col = f"avg_{time_unit}"
    table = Table(title=f"Benchmark Summary (avg {time_unit} at largest n)")
    table.add_column("Distribution", style="bold")
    table.add_column("Engine")
    table.add_column("n", justify="right")
    table.add_column(avg_col, justify="right")

    if summary.empty:
        _console.print("(no results)")
        return

    # rows arrive in sweep order, so the last row of each group is its largest n
    last = summary.groupby(["distribution", "engine", "threshold"], dropna=False, sort=False).tail(1)
    for row in last.itertuples(index=False):
        engine = row.engine if pd.isna(row.threshold) else f"{row.engine} (th={int(row.threshold)})"
        table.add_row(row.distribution, engine, str(row.size), str(getattr(row, avg_col)))
    _console.print()
    _console.print(table)
    _console.print()


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )


# ------------------------- core runner ------------------------- #

def run_benchmarks(config: BenchmarkConfig, sink: CsvReportSink) -> int:
    """
    Run every (distribution, engine) combination and emit results to `sink`.

    Returns the number of combinations whose results were written.
    """
    lo, hi = config.value_range
    gen = SequenceGenerator(config.seed, min_value=lo, max_value=hi)
    engines = config.engines()
    written = 0

    with tqdm(total=len(config.distributions) * len(engines), desc="Combinations", unit="cfg") as bar:
        for dist in config.distributions:
            max_seq = gen.generate(dist, config.max_size, swap_ratio=config.swap_ratio)
            test_sequences = build_sweep(max_seq, config.min_size, config.max_size, config.step)
            log.info("%s: %d test cases (n=%d..%d)", dist.value, len(test_sequences),
                     len(test_sequences[0]), len(test_sequences[-1]))

            for engine in engines:
                bar.set_postfix_str(f"{dist.value}/{engine.label}")
                results = benchmark_engine(
                    test_sequences,
                    engine.sort,
                    num_runs=config.num_runs,
                    time_unit=config.time_unit,
                    warmup=config.warmup,
                    disable_gc=config.disable_gc,
                    validate=config.validate,
                )
                if sink.emit(dist, engine, results) is not None:
                    written += 1
                bar.update(1)

    return written


def run_experiment(config_path: Path, *, echo: bool = True) -> Path:
    config = load_config(config_path)

    run_dir = _ensure_run_dir(config.output_dir, config.experiment_name)
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    # Persist resolved config early
    _write_yaml(config.to_dict(), cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {config.experiment_name}")
    _console.print(f"[bold]Engines:[/bold] {', '.join(e.label for e in config.engines())}")
    _console.print()

    sink = CsvReportSink(run_dir, time_unit=config.time_unit, echo=echo, console=_console)
    written = run_benchmarks(config, sink)
    summary_path = sink.write_summary()

    _print_rich_summary(sink.summary_frame(), config.time_unit)
    if sink.failed:
        log.warning("%d combination(s) skipped: %s", len(sink.failed), ", ".join(sink.failed))

    _console.print(f"[bold green]Done.[/bold green] Wrote {written} result file(s) to {run_dir}")
    if summary_path is not None:
        _console.print(f" - {summary_path}")
    _console.print(f" - {meta_path}")
    _console.print(f" - {cfg_resolved_path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Benchmark merge sort against hybrid merge/insertion sort.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--quiet", action="store_true", help="Do not echo per-combination tables")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path, echo=not args.quiet)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
