"""Tests for the timing harness and sweep construction."""

from __future__ import annotations

import gc
import itertools
import types
from typing import List

import pytest

from mergebench.algorithms import EngineSpec
from mergebench.bench import measure
from mergebench.bench.measure import BenchmarkResult, benchmark_engine, time_trials
from mergebench.bench.sweep import build_sweep, sweep_sizes


@pytest.fixture
def fake_clock(monkeypatch):
    """Replace the harness clock: every timed call lasts `step_ns` nanoseconds."""

    def install(step_ns: int) -> None:
        ticks = itertools.count(0, step_ns)
        monkeypatch.setattr(measure, "time", types.SimpleNamespace(perf_counter_ns=lambda: next(ticks)))

    return install


# ------------------------- time_trials ------------------------- #

def test_each_run_gets_an_independent_copy() -> None:
    original = [3, 1, 2]
    seen: List[List[int]] = []

    def destructive_sort(a: List[int]) -> None:
        seen.append(list(a))
        a.sort()
        a.append(99)

    samples = time_trials(destructive_sort, original, num_runs=4)
    assert len(samples) == 4
    assert seen == [[3, 1, 2]] * 4
    assert original == [3, 1, 2]


def test_warmup_is_not_timed() -> None:
    calls = []
    samples = time_trials(lambda a: calls.append(1), [1], num_runs=3, warmup=True)
    assert len(calls) == 4
    assert len(samples) == 3


def test_disable_gc_restores_state() -> None:
    assert gc.isenabled()
    time_trials(lambda a: None, [1, 2], num_runs=2, disable_gc=True)
    assert gc.isenabled()


def test_num_runs_must_be_positive() -> None:
    with pytest.raises(ValueError):
        time_trials(lambda a: None, [1], num_runs=0)


# ------------------------- benchmark_engine ------------------------- #

def test_one_result_per_sequence_in_order() -> None:
    seqs = [[5, 4, 3], [1], [], [9, 8, 7, 6, 5, 4]]
    results = benchmark_engine(seqs, EngineSpec.standard().sort, num_runs=2)
    assert [r.size for r in results] == [3, 1, 0, 6]
    assert all(isinstance(r, BenchmarkResult) for r in results)
    assert all(r.avg_duration >= 0 for r in results)
    # originals untouched
    assert seqs[0] == [5, 4, 3]


def test_average_is_floor_of_mean_in_unit(fake_clock) -> None:
    # each run takes 1.5 ms; mean 1.5 ms floors to 1
    fake_clock(1_500_000)
    results = benchmark_engine([[1, 2, 3]], lambda a: None, num_runs=10, time_unit="ms")
    assert results == [BenchmarkResult(size=3, avg_duration=1)]


def test_sub_unit_runs_accumulate_before_division(fake_clock) -> None:
    # each run is 999 us; truncating per run would report 0 ms per run
    fake_clock(999_000)
    results = benchmark_engine([[1]], lambda a: None, num_runs=10, time_unit="us")
    assert results[0].avg_duration == 999


def test_unknown_time_unit_rejected() -> None:
    with pytest.raises(ValueError, match="time_unit"):
        benchmark_engine([[1]], lambda a: None, time_unit="fortnight")


def test_validate_catches_broken_sort() -> None:
    def not_a_sort(a: List[int]) -> None:
        a.reverse()

    with pytest.raises(AssertionError, match=r"not sorted at i=0: 3 > 2"):
        benchmark_engine([[1, 2, 3]], not_a_sort, num_runs=1, validate=True)


def test_validate_names_values_of_changed_multiset() -> None:
    def lossy_sort(a: List[int]) -> None:
        a.sort()
        a[-1] = a[0]

    # input {1, 2, 3} becomes [1, 2, 1]: one 1 too many, the 3 is gone
    with pytest.raises(AssertionError, match=r"multiset changed: \{1: -1, 3: 1\}"):
        benchmark_engine([[3, 1, 2]], lossy_sort, num_runs=1, validate=True)


def test_validate_passes_real_engines() -> None:
    seqs = [[3, 3, 1, 2], list(range(40, 0, -1))]
    for engine in (EngineSpec.standard(), EngineSpec.hybrid(4)):
        assert len(benchmark_engine(seqs, engine.sort, num_runs=1, validate=True)) == 2


# ------------------------- sweeps ------------------------- #

def test_sweep_sizes_inclusive_of_max() -> None:
    assert sweep_sizes(500, 1000, 100) == [500, 600, 700, 800, 900, 1000]
    assert sweep_sizes(500, 950, 100) == [500, 600, 700, 800, 900]
    assert sweep_sizes(10, 5, 1) == []


@pytest.mark.parametrize("args", [(1, 10, 0), (-1, 10, 1)])
def test_sweep_sizes_rejects_bad_params(args) -> None:
    with pytest.raises(ValueError):
        sweep_sizes(*args)


def test_build_sweep_uses_prefixes() -> None:
    max_seq = list(range(100, 0, -1))
    sweep = build_sweep(max_seq, 10, 100, 30)
    assert [len(s) for s in sweep] == [10, 40, 70, 100]
    for s in sweep:
        assert s == max_seq[: len(s)]
    # copies, not views
    sweep[0][0] = -1
    assert max_seq[0] == 100


def test_build_sweep_rejects_short_sequence() -> None:
    with pytest.raises(ValueError, match="too short"):
        build_sweep([1, 2, 3], 1, 5, 1)
