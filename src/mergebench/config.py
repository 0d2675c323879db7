"""
Experiment configuration.

A run is described by a YAML file:

    experiment_name: merge_vs_hybrid
    output_dir: results
    seed: 12345
    min_size: 500
    max_size: 100000
    step: 100
    num_runs: 10
    time_unit: ms
    thresholds: [10, 20, 30, 40, 50]
    distributions: [random, reverse, nearly_sorted]
    swap_ratio: 0.05
    value_range: [0, 6000]
    warmup: false
    disable_gc: false
    validate: false
    include_standard: true     # false benchmarks the hybrid thresholds only

Only `experiment_name` and `output_dir` are required; the rest default to the
values above.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from mergebench.algorithms import EngineSpec
from mergebench.bench.measure import NUM_RUNS, TIME_UNITS
from mergebench.datasets import SUPPORTED_DISTS, DistributionKind

__all__ = ["BenchmarkConfig", "REQUIRED_KEYS", "load_config", "config_from_dict"]

REQUIRED_KEYS = ("experiment_name", "output_dir")


@dataclass(frozen=True)
class BenchmarkConfig:
    experiment_name: str
    output_dir: Path
    seed: int = 12345
    min_size: int = 500
    max_size: int = 100_000
    step: int = 100
    num_runs: int = NUM_RUNS
    time_unit: str = "ms"
    thresholds: Tuple[int, ...] = (10, 20, 30, 40, 50)
    distributions: Tuple[DistributionKind, ...] = (
        DistributionKind.RANDOM,
        DistributionKind.REVERSE,
        DistributionKind.NEARLY_SORTED,
    )
    swap_ratio: float = 0.05
    value_range: Tuple[int, int] = (0, 6000)
    warmup: bool = False
    disable_gc: bool = False
    validate: bool = False
    include_standard: bool = True

    def __post_init__(self) -> None:
        _check_sizes(self)
        for t in self.thresholds:
            if t < 1:
                raise ValueError(f"thresholds must all be >= 1; got {t}")
        if self.num_runs < 1:
            raise ValueError("num_runs must be >= 1")
        if self.time_unit not in TIME_UNITS:
            raise ValueError(f"time_unit must be one of {sorted(TIME_UNITS)}; got {self.time_unit!r}")
        if not self.engines():
            raise ValueError("No engines selected: set thresholds or include_standard")

    def engines(self) -> List[EngineSpec]:
        """Standard engine first (if enabled), then one hybrid per threshold."""
        out = [EngineSpec.standard()] if self.include_standard else []
        out.extend(EngineSpec.hybrid(t) for t in self.thresholds)
        return out

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["output_dir"] = str(self.output_dir)
        d["thresholds"] = list(self.thresholds)
        d["distributions"] = [k.value for k in self.distributions]
        d["value_range"] = list(self.value_range)
        return d


def load_config(path: Path) -> BenchmarkConfig:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return config_from_dict(raw)


def config_from_dict(cfg: Dict[str, Any]) -> BenchmarkConfig:
    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    known = set(BenchmarkConfig.__dataclass_fields__)
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    kwargs: Dict[str, Any] = {
        "experiment_name": str(cfg["experiment_name"]),
        "output_dir": Path(cfg["output_dir"]),
    }
    for name in ("seed", "min_size", "max_size", "step", "num_runs"):
        if name in cfg:
            kwargs[name] = _parse_int(cfg[name], name)
    for name in ("warmup", "disable_gc", "validate", "include_standard"):
        if name in cfg:
            kwargs[name] = _parse_bool(cfg[name], name)

    if "time_unit" in cfg:
        if cfg["time_unit"] not in TIME_UNITS:
            raise ValueError(f"time_unit must be one of {sorted(TIME_UNITS)}; got {cfg['time_unit']!r}")
        kwargs["time_unit"] = cfg["time_unit"]
    if "thresholds" in cfg:
        kwargs["thresholds"] = tuple(_parse_int_list(cfg["thresholds"], "thresholds"))
    if "distributions" in cfg:
        kwargs["distributions"] = tuple(_parse_distributions(cfg["distributions"]))
    if "swap_ratio" in cfg:
        kwargs["swap_ratio"] = _parse_swap_ratio(cfg["swap_ratio"])
    if "value_range" in cfg:
        kwargs["value_range"] = _parse_value_range(cfg["value_range"])

    return BenchmarkConfig(**kwargs)


# ------------------------- helpers ------------------------- #


def _parse_int(val: Any, name: str) -> int:
    if not isinstance(val, int) or isinstance(val, bool):
        raise ValueError(f"{name} must be an integer; got {val!r}")
    return val


def _parse_bool(val: Any, name: str) -> bool:
    if not isinstance(val, bool):
        raise ValueError(f"{name} must be true/false; got {val!r}")
    return val


def _parse_int_list(val: Any, name: str) -> List[int]:
    if not isinstance(val, (list, tuple)):
        raise ValueError(f"{name} must be a list of integers")
    return [_parse_int(v, name) for v in val]


def _parse_distributions(val: Any) -> List[DistributionKind]:
    if not isinstance(val, (list, tuple)) or not val:
        raise ValueError("distributions must be a non-empty list")
    out = []
    for v in val:
        if v not in SUPPORTED_DISTS:
            raise ValueError(f"Unsupported distribution {v!r}. Supported: {sorted(SUPPORTED_DISTS)}")
        out.append(DistributionKind(v))
    return out


def _parse_swap_ratio(val: Any) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValueError(f"swap_ratio must be a number in [0.0, 1.0]; got {val!r}")
    if not (0.0 <= float(val) <= 1.0):
        raise ValueError(f"swap_ratio must be in [0.0, 1.0]; got {val}")
    return float(val)


def _parse_value_range(val: Any) -> Tuple[int, int]:
    if not isinstance(val, (list, tuple)) or len(val) != 2:
        raise ValueError("value_range must be a 2-element list [min, max]")
    lo = _parse_int(val[0], "value_range")
    hi = _parse_int(val[1], "value_range")
    if lo < 0 or lo > hi:
        raise ValueError(f"value_range invalid: need 0 <= min <= max, got [{lo}, {hi}]")
    return lo, hi


def _check_sizes(config: BenchmarkConfig) -> None:
    if config.min_size < 1:
        raise ValueError(f"min_size must be >= 1; got {config.min_size}")
    if config.max_size < config.min_size:
        raise ValueError(f"max_size ({config.max_size}) < min_size ({config.min_size})")
    if config.step < 1:
        raise ValueError(f"step must be >= 1; got {config.step}")
