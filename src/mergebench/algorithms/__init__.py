"""
Sort engines public API.

The set of engines is closed: an `EngineSpec` is either
    EngineSpec.standard()           -> recursive merge sort
    EngineSpec.hybrid(threshold)    -> merge sort with insertion-sort base case

Both sort a mutable sequence in place, ascending and stable:
    engine = EngineSpec.hybrid(20)
    engine.sort(values)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, MutableSequence, Optional

from . import hybrid_merge, standard_merge
from .insertion import insertion_sort
from .merge import merge

__all__ = [
    "EngineKind",
    "EngineSpec",
    "merge",
    "insertion_sort",
    "standard_merge",
    "hybrid_merge",
]


class EngineKind(str, enum.Enum):
    STANDARD = "standard"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class EngineSpec:
    kind: EngineKind
    threshold: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", EngineKind(self.kind))
        if self.kind is EngineKind.HYBRID:
            hybrid_merge.validate_threshold(self.threshold)
        elif self.threshold is not None:
            raise ValueError("standard engine takes no threshold")

    @classmethod
    def standard(cls) -> "EngineSpec":
        return cls(EngineKind.STANDARD)

    @classmethod
    def hybrid(cls, threshold: int = hybrid_merge.DEFAULT_THRESHOLD) -> "EngineSpec":
        return cls(EngineKind.HYBRID, threshold)

    @property
    def label(self) -> str:
        """Short name used in file names and tables, e.g. "merge" or "hybrid_th20"."""
        if self.kind is EngineKind.STANDARD:
            return "merge"
        return f"hybrid_th{self.threshold}"

    def sort(
        self, a: MutableSequence[Any], *, key: Optional[Callable[[Any], Any]] = None
    ) -> None:
        if self.kind is EngineKind.STANDARD:
            standard_merge.sort(a, key=key)
        else:
            hybrid_merge.sort(a, threshold=self.threshold, key=key)  # type: ignore[arg-type]
