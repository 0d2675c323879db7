"""
Timing harness for the merge engines.

One sample is exactly one call to `sort_fn(copy)`, timed with the monotonic
high-resolution clock `time.perf_counter_ns`. Copying the input, GC control
and the optional warmup/validation calls all happen outside the timed block.

Public API (stable):
    BenchmarkResult
    NUM_RUNS
    TIME_UNITS
    time_trials(sort_fn, a, *, num_runs, warmup, disable_gc) -> list[int]
    benchmark_engine(test_sequences, sort_fn, *, ...) -> list[BenchmarkResult]

Averaging rule:
    avg_duration = floor(mean(samples_ns) / unit_ns)
                 = sum(samples_ns) // (num_runs * unit_ns)
Summing nanoseconds before dividing keeps sub-unit differences that would be
lost if each sample were truncated to the reporting unit first.
"""

from __future__ import annotations

import gc
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from mergebench.validate import (
    equals_oracle,
    first_nondecreasing_violation_index,
    permutation_counter_diff,
)

__all__ = ["BenchmarkResult", "NUM_RUNS", "TIME_UNITS", "time_trials", "benchmark_engine"]

NUM_RUNS = 10

TIME_UNITS: Dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
}

SortFn = Callable[[List[Any]], Any]


@dataclass(frozen=True)
class BenchmarkResult:
    size: int
    avg_duration: int


def time_trials(
    sort_fn: SortFn,
    a: Sequence[Any],
    *,
    num_runs: int = NUM_RUNS,
    warmup: bool = False,
    disable_gc: bool = False,
) -> List[int]:
    """
    Time `num_runs` independent sorts of `a`.

    Parameters
    ----------
    sort_fn : Callable[[list], Any]
        In-place sort. Its return value is ignored.
    a : sequence
        Original input. Every run sorts a fresh `list(a)`, so `a` is never
        mutated and no run sees another run's output.
    num_runs : int
        Number of timed samples (>= 1).
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable the GC for the timed loop; restored after.

    Returns
    -------
    list[int]
        Elapsed nanoseconds per run, in run order.
    """
    if num_runs < 1:
        raise ValueError("num_runs must be >= 1")

    if warmup:
        sort_fn(list(a))

    samples: List[int] = []
    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        for _ in range(num_runs):
            arg = list(a)
            t0 = time.perf_counter_ns()
            sort_fn(arg)
            t1 = time.perf_counter_ns()
            samples.append(t1 - t0)
    finally:
        # Leave GC disabled if the caller had it disabled already.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return samples


def benchmark_engine(
    test_sequences: Sequence[Sequence[Any]],
    sort_fn: SortFn,
    *,
    num_runs: int = NUM_RUNS,
    time_unit: str = "ms",
    warmup: bool = False,
    disable_gc: bool = False,
    validate: bool = False,
) -> List[BenchmarkResult]:
    """
    Run one trial set per test sequence and average it.

    Returns exactly one `BenchmarkResult` per input sequence, in input order,
    with `size == len(sequence)`.

    When `validate` is set, one extra untimed sort per sequence is checked
    against the oracle; a mismatch raises AssertionError.
    """
    unit_ns = _unit_ns(time_unit)
    if num_runs < 1:
        raise ValueError("num_runs must be >= 1")

    results: List[BenchmarkResult] = []
    for seq in test_sequences:
        samples = time_trials(
            sort_fn, seq, num_runs=num_runs, warmup=warmup, disable_gc=disable_gc
        )
        avg = sum(samples) // (num_runs * unit_ns)
        results.append(BenchmarkResult(size=len(seq), avg_duration=int(avg)))

        if validate:
            _check_output(sort_fn, seq)

    return results


def _unit_ns(time_unit: str) -> int:
    try:
        return TIME_UNITS[time_unit]
    except KeyError:
        raise ValueError(
            f"Unsupported time_unit: {time_unit!r}. Supported: {sorted(TIME_UNITS)}"
        ) from None


def _check_output(sort_fn: SortFn, seq: Sequence[Any]) -> None:
    out = list(seq)
    sort_fn(out)
    if equals_oracle(seq, out):
        return
    diff = permutation_counter_diff(seq, out)
    if diff:
        # value -> (count in input) - (count in output)
        where = f"multiset changed: {dict(sorted(diff.items()))}"
    else:
        i = first_nondecreasing_violation_index(out)
        where = f"not sorted at i={i}: {out[i]} > {out[i + 1]}"
    raise AssertionError(f"sort output mismatch for n={len(seq)}: {where}")
