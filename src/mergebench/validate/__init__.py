"""
Validation utilities public API.

Re-exports:
    - Oracle:
        oracle_sort
        equals_oracle

    - Property checks:
        first_nondecreasing_violation_index
        is_nonincreasing
        is_permutation
        permutation_counter_diff
        is_stable
        in_bounds
"""

from .oracle import equals_oracle, oracle_sort
from .properties import (
    first_nondecreasing_violation_index,
    in_bounds,
    is_nonincreasing,
    is_permutation,
    is_stable,
    permutation_counter_diff,
)

__all__ = [
    "oracle_sort",
    "equals_oracle",
    "first_nondecreasing_violation_index",
    "is_nonincreasing",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "in_bounds",
]
