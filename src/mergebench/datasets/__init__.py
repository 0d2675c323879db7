"""
Datasets package public API.

Re-export the generator so callers can write:
    from mergebench.datasets import SequenceGenerator, DistributionKind
"""

from .generators import SUPPORTED_DISTS, DistributionKind, SequenceGenerator

__all__ = ["SequenceGenerator", "DistributionKind", "SUPPORTED_DISTS"]
