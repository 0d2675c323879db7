"""Tests for YAML config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mergebench.algorithms import EngineSpec
from mergebench.config import BenchmarkConfig, config_from_dict, load_config
from mergebench.datasets import DistributionKind

BASE = {"experiment_name": "t", "output_dir": "out"}


def test_defaults_reproduce_original_protocol() -> None:
    cfg = config_from_dict(dict(BASE))
    assert cfg.seed == 12345
    assert (cfg.min_size, cfg.max_size, cfg.step) == (500, 100_000, 100)
    assert cfg.num_runs == 10
    assert cfg.time_unit == "ms"
    assert cfg.thresholds == (10, 20, 30, 40, 50)
    assert cfg.distributions == (
        DistributionKind.RANDOM,
        DistributionKind.REVERSE,
        DistributionKind.NEARLY_SORTED,
    )
    assert cfg.value_range == (0, 6000)


def test_engines_standard_first_then_thresholds_in_order() -> None:
    cfg = config_from_dict({**BASE, "thresholds": [30, 10]})
    assert cfg.engines() == [EngineSpec.standard(), EngineSpec.hybrid(30), EngineSpec.hybrid(10)]
    cfg = config_from_dict({**BASE, "thresholds": [5], "include_standard": False})
    assert cfg.engines() == [EngineSpec.hybrid(5)]


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "c.yaml"
    path.write_text(yaml.safe_dump({**BASE, "distributions": ["reverse"], "step": 50}))
    cfg = load_config(path)
    assert isinstance(cfg, BenchmarkConfig)
    assert cfg.distributions == (DistributionKind.REVERSE,)
    assert cfg.step == 50
    assert cfg.output_dir == Path("out")


def test_to_dict_is_yaml_safe() -> None:
    cfg = config_from_dict(dict(BASE))
    round_tripped = yaml.safe_load(yaml.safe_dump(cfg.to_dict()))
    assert config_from_dict(round_tripped) == cfg


def test_shipped_configs_load() -> None:
    configs = Path(__file__).resolve().parents[1] / "experiments" / "configs"
    for path in sorted(configs.glob("*.yaml")):
        load_config(path)


@pytest.mark.parametrize(
    "override,match",
    [
        ({"thresholds": [10, 0]}, "threshold"),
        ({"min_size": 0}, "min_size"),
        ({"min_size": 10, "max_size": 5}, "max_size"),
        ({"step": 0}, "step"),
        ({"num_runs": 0}, "num_runs"),
        ({"time_unit": "h"}, "time_unit"),
        ({"distributions": ["sawtooth"]}, "Unsupported distribution"),
        ({"swap_ratio": 2}, "swap_ratio"),
        ({"value_range": [10, 1]}, "value_range"),
        ({"seed": "abc"}, "seed"),
        ({"warmup": "yes"}, "warmup"),
        ({"colour": "blue"}, "Unknown config keys"),
        ({"thresholds": [], "include_standard": False}, "No engines"),
    ],
)
def test_invalid_values_rejected(override, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        config_from_dict({**BASE, **override})


def test_missing_required_keys() -> None:
    with pytest.raises(ValueError, match="output_dir"):
        config_from_dict({"experiment_name": "x"})


@pytest.mark.parametrize(
    "override,match",
    [
        ({"min_size": 20, "max_size": 10}, "max_size"),
        ({"step": 0}, "step"),
        ({"thresholds": (0,)}, "threshold"),
        ({"num_runs": 0}, "num_runs"),
        ({"time_unit": "h"}, "time_unit"),
        ({"thresholds": (), "include_standard": False}, "No engines"),
    ],
)
def test_direct_construction_is_validated(override, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        BenchmarkConfig(experiment_name="t", output_dir=Path("out"), **override)
