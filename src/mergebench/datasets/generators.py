"""
Sequence generators for merge-sort benchmarks.

Currently implemented:
- DistributionKind.RANDOM:
    Integers drawn uniformly from [min_value, max_value], inclusive both ends.

- DistributionKind.REVERSE:
    Non-increasing values max_value - i * (max_value - min_value) // size.
    Deterministic; does not touch the RNG.

- DistributionKind.NEARLY_SORTED:
    Ascending base min_value + i * (max_value - min_value) // size, then
    int(size * swap_ratio) swaps of two positions drawn with replacement.

Public API (stable):
    SequenceGenerator(seed=42, *, min_value=0, max_value=6000)
    DistributionKind
    SUPPORTED_DISTS

Conventions:
- One generator owns one numpy.random.Generator for its whole lifetime.
  State is never reset between calls, so the order of generate_* calls is
  part of the reproducibility contract for a fixed seed.
- Integer truncation in the reverse / nearly-sorted formulas gives uneven
  spacing; callers may rely on monotonicity and bounds, not exact values.
- Returns Python `list[int]` (engines stay NumPy-agnostic).
"""

from __future__ import annotations

import enum
from typing import Any, List, Union

import numpy as np

__all__ = ["DistributionKind", "SUPPORTED_DISTS", "SequenceGenerator"]

DEFAULT_MIN_VALUE = 0
DEFAULT_MAX_VALUE = 6000
DEFAULT_SWAP_RATIO = 0.05


class DistributionKind(str, enum.Enum):
    RANDOM = "random"
    REVERSE = "reverse"
    NEARLY_SORTED = "nearly_sorted"


SUPPORTED_DISTS = frozenset(k.value for k in DistributionKind)


class SequenceGenerator:
    """
    Seeded source of benchmark input sequences.

    Parameters
    ----------
    seed : int
        Seed for the underlying numpy.random.Generator.
    min_value, max_value : int
        Inclusive value bounds. Must satisfy 0 <= min_value <= max_value.
    """

    def __init__(
        self,
        seed: int = 42,
        *,
        min_value: int = DEFAULT_MIN_VALUE,
        max_value: int = DEFAULT_MAX_VALUE,
    ) -> None:
        if not _is_int_like(min_value) or not _is_int_like(max_value):
            raise ValueError("min_value/max_value must be integers")
        if min_value < 0 or min_value > max_value:
            raise ValueError(
                f"value bounds invalid: need 0 <= min <= max, got [{min_value}, {max_value}]"
            )
        self.seed = int(seed)
        self.min_value = int(min_value)
        self.max_value = int(max_value)
        self._rng = np.random.default_rng(self.seed)

    def __repr__(self) -> str:
        return (
            f"SequenceGenerator(seed={self.seed}, "
            f"min_value={self.min_value}, max_value={self.max_value})"
        )

    def generate(
        self,
        kind: Union[DistributionKind, str],
        size: int,
        *,
        swap_ratio: float = DEFAULT_SWAP_RATIO,
    ) -> List[int]:
        """Dispatch to the generator for `kind` (enum member or its string value)."""
        kind = _parse_kind(kind)
        if kind is DistributionKind.RANDOM:
            return self.generate_random(size)
        if kind is DistributionKind.REVERSE:
            return self.generate_reverse(size)
        return self.generate_nearly_sorted(size, swap_ratio=swap_ratio)

    def generate_random(self, size: int) -> List[int]:
        _validate_size(size)
        if size == 0:
            return []
        # Generator.integers is half-open [low, high); +1 makes max inclusive.
        arr = self._rng.integers(self.min_value, self.max_value + 1, size=size, dtype=np.int64)
        return arr.tolist()

    def generate_reverse(self, size: int) -> List[int]:
        _validate_size(size)
        lo, hi = self.min_value, self.max_value
        return [hi - i * (hi - lo) // size for i in range(size)]

    def generate_nearly_sorted(
        self, size: int, swap_ratio: float = DEFAULT_SWAP_RATIO
    ) -> List[int]:
        """
        Ascending base sequence degraded by random pairwise swaps.

        The number of swaps is floor(size * swap_ratio). Both positions of a
        swap are drawn independently, so a swap may pick the same index twice
        and do nothing. No bound on displacement is guaranteed.
        """
        _validate_size(size)
        ratio = _parse_swap_ratio(swap_ratio)
        lo, hi = self.min_value, self.max_value
        arr = [lo + i * (hi - lo) // size for i in range(size)]
        num_swaps = int(size * ratio)
        if num_swaps <= 0:
            return arr
        idxs = self._rng.integers(0, size, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            arr[i], arr[j] = arr[j], arr[i]
        return arr


# ------------------------- helpers ------------------------- #


def _parse_kind(kind: Union[DistributionKind, str]) -> DistributionKind:
    try:
        return DistributionKind(kind)
    except ValueError as e:
        raise ValueError(
            f"Unsupported distribution: {kind!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        ) from e


def _validate_size(size: int) -> None:
    if not _is_int_like(size):
        raise ValueError("size must be an int")
    if size < 0:
        raise ValueError("size must be nonnegative")


def _parse_swap_ratio(val: Any) -> float:
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"swap_ratio must be a float in [0.0, 1.0]; got {val!r}") from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"swap_ratio must be in [0.0, 1.0]; got {x}")
    return x


def _is_int_like(x: Any) -> bool:
    # bool is an int subclass but never a meaningful size
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
