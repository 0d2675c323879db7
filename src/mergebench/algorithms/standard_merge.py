"""
Standard engine: textbook recursive top-down merge sort.

Sorts in place, ascending, stable. Splits at mid = left + (right - left) // 2
and merges through the shared primitive in `mergebench.algorithms.merge`.
"""

from __future__ import annotations

from typing import Any, Callable, MutableSequence, Optional

from .merge import merge, sort_with_key

__all__ = ["sort"]


def sort(
    a: MutableSequence[Any], *, key: Optional[Callable[[Any], Any]] = None
) -> None:
    """Sort `a` in place. Empty input is a no-op."""
    if not a:
        return
    sort_with_key(a, key, _sort_all)


def _sort_all(a: MutableSequence[Any]) -> None:
    _merge_sort(a, 0, len(a) - 1)


def _merge_sort(a: MutableSequence[Any], left: int, right: int) -> None:
    if left < right:
        mid = left + (right - left) // 2
        _merge_sort(a, left, mid)
        _merge_sort(a, mid + 1, right)
        merge(a, left, mid, right)
