"""
Size sweeps.

All test cases of one distribution are prefixes of a single maximal
sequence, so a smaller case is never regenerated independently of a larger
one.
"""

from __future__ import annotations

from typing import Any, List, Sequence

__all__ = ["sweep_sizes", "build_sweep"]


def sweep_sizes(min_size: int, max_size: int, step: int) -> List[int]:
    """Sizes min_size, min_size + step, ... up to and including max_size."""
    if step < 1:
        raise ValueError(f"step must be >= 1; got {step}")
    if min_size < 0:
        raise ValueError(f"min_size must be nonnegative; got {min_size}")
    return list(range(min_size, max_size + 1, step))


def build_sweep(
    max_sequence: Sequence[Any], min_size: int, max_size: int, step: int
) -> List[List[Any]]:
    """Return independent prefix copies of `max_sequence`, one per sweep size."""
    sizes = sweep_sizes(min_size, max_size, step)
    if sizes and len(max_sequence) < sizes[-1]:
        raise ValueError(
            f"max_sequence too short for sweep: len={len(max_sequence)} < {sizes[-1]}"
        )
    return [list(max_sequence[:n]) for n in sizes]
