"""
Property helpers for validating sort results.

Used by the tests and by the benchmark harness when `validate` is enabled.

Public API (stable):
    first_nondecreasing_violation_index(xs) -> int | None
    is_nonincreasing(xs) -> bool
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    is_stable(before, after, key) -> bool
    in_bounds(xs, lo, hi) -> bool

Notes
-----
Stability cannot be read off plain integers since equal keys are
indistinguishable. `is_stable` expects items that carry a distinguishing tag
next to their key, e.g. (value, original_index), and checks that tags of equal
keys appear in `after` in the same relative order as in `before`.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Callable, Dict, Hashable, List, Sequence

__all__ = [
    "first_nondecreasing_violation_index",
    "is_nonincreasing",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "in_bounds",
]


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> int | None:
    """
    Return the first index i where xs[i] > xs[i+1], or None.

        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not sorted at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_nonincreasing(xs: Sequence[Any]) -> bool:
    return all(xs[i] >= xs[i + 1] for i in range(len(xs) - 1))


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Any, int]:
    """
    Map value -> (count in a) - (count in b), omitting zero entries.

    An empty dict means identical multisets.
    """
    ca, cb = Counter(a), Counter(b)
    diff = {k: ca[k] - cb[k] for k in ca.keys() | cb.keys()}
    return {k: d for k, d in diff.items() if d != 0}


def is_stable(
    before: Sequence[Any], after: Sequence[Any], key: Callable[[Any], Any]
) -> bool:
    """True iff items sharing a key keep their relative order from `before`."""
    expected: Dict[Any, List[Any]] = defaultdict(list)
    for item in before:
        expected[key(item)].append(item)
    seen: Dict[Any, List[Any]] = defaultdict(list)
    for item in after:
        seen[key(item)].append(item)
    return expected == seen


def in_bounds(xs: Sequence[int], lo: int, hi: int) -> bool:
    """True iff every element lies in [lo, hi]."""
    return all(lo <= x <= hi for x in xs)
