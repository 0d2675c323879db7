"""
Merge primitive shared by every engine in this package.

Bounds are inclusive on both ends: merge(a, left, mid, right) combines the
sorted runs a[left..mid] and a[mid+1..right] in place.
"""

from __future__ import annotations

from typing import Any, Callable, List, MutableSequence, Optional

__all__ = ["merge", "sort_with_key"]


def merge(a: MutableSequence[Any], left: int, mid: int, right: int) -> None:
    buf: List[Any] = []
    i = left
    j = mid + 1

    while i <= mid and j <= right:
        # <= takes the left run on ties: stability hinges on this
        if a[i] <= a[j]:
            buf.append(a[i])
            i += 1
        else:
            buf.append(a[j])
            j += 1

    buf.extend(a[i : mid + 1])
    buf.extend(a[j : right + 1])
    a[left : right + 1] = buf


class _Keyed:
    """Element wrapper that orders by a precomputed key only."""

    __slots__ = ("key", "item")

    def __init__(self, key: Any, item: Any) -> None:
        self.key = key
        self.item = item

    def __le__(self, other: "_Keyed") -> bool:
        return self.key <= other.key

    def __gt__(self, other: "_Keyed") -> bool:
        return self.key > other.key


def sort_with_key(
    a: MutableSequence[Any],
    key: Optional[Callable[[Any], Any]],
    sort_fn: Callable[[MutableSequence[Any]], None],
) -> None:
    """
    Run `sort_fn` on `a` ordered by `key(item)`, in place. With key=None the
    items are sorted directly.

    Items are wrapped so that equal keys compare equal even when the items
    themselves differ; this lets stability be observed on tagged data.
    """
    if key is None:
        sort_fn(a)
        return
    wrapped = [_Keyed(key(x), x) for x in a]
    sort_fn(wrapped)
    a[:] = [w.item for w in wrapped]
