"""Insertion sort over an inclusive subrange; base case of the hybrid engine."""

from __future__ import annotations

from typing import Any, MutableSequence

__all__ = ["insertion_sort"]


def insertion_sort(a: MutableSequence[Any], left: int, right: int) -> None:
    for i in range(left + 1, right + 1):
        item = a[i]
        j = i - 1
        # strict > keeps equal elements in their original order
        while j >= left and a[j] > item:
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = item
