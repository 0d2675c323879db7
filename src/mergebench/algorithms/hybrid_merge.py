"""
Hybrid engine: merge sort that hands small subranges to insertion sort.

A subrange a[left..right] with right - left + 1 <= threshold is finished by
insertion sort; larger ranges are split, recursed and merged exactly like the
standard engine. threshold=1 therefore behaves as plain merge sort, and a
threshold at least len(a) degenerates to a single insertion sort.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, MutableSequence, Optional

from .insertion import insertion_sort
from .merge import merge, sort_with_key

__all__ = ["DEFAULT_THRESHOLD", "sort", "validate_threshold"]

DEFAULT_THRESHOLD = 42


def validate_threshold(threshold: Any) -> int:
    if not isinstance(threshold, int) or isinstance(threshold, bool):
        raise ValueError(f"threshold must be an int >= 1; got {threshold!r}")
    if threshold < 1:
        raise ValueError(f"threshold must be >= 1; got {threshold}")
    return threshold


def sort(
    a: MutableSequence[Any],
    *,
    threshold: int = DEFAULT_THRESHOLD,
    key: Optional[Callable[[Any], Any]] = None,
) -> None:
    """Sort `a` in place with the given switchover threshold."""
    threshold = validate_threshold(threshold)
    if not a:
        return
    sort_with_key(a, key, partial(_sort_all, threshold=threshold))


def _sort_all(a: MutableSequence[Any], *, threshold: int) -> None:
    _merge_sort(a, 0, len(a) - 1, threshold)


def _merge_sort(a: MutableSequence[Any], left: int, right: int, threshold: int) -> None:
    if right - left + 1 <= threshold:
        insertion_sort(a, left, right)
    elif left < right:
        mid = left + (right - left) // 2
        _merge_sort(a, left, mid, threshold)
        _merge_sort(a, mid + 1, right, threshold)
        merge(a, left, mid, right)
