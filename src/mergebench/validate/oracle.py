"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth: it is stable, so for
key-based sorts of tagged data it also fixes the expected order of ties.
Both merge engines must match it element for element.

Public API (stable):
    oracle_sort(a, key=None) -> list
    equals_oracle(a, out, key=None) -> bool
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

__all__ = ["oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> List[Any]:
    """Return a new ascending, stably sorted list; `a` is left untouched."""
    return sorted(a, key=key)


def equals_oracle(
    a: Sequence[Any], out: Sequence[Any], key: Optional[Callable[[Any], Any]] = None
) -> bool:
    """True iff `out` equals `oracle_sort(a, key)` exactly."""
    return list(out) == oracle_sort(a, key=key)
