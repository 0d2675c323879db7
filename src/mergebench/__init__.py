"""
mergebench: merge sort vs. hybrid merge/insertion sort benchmarks.

Subpackages:
    datasets    seeded input sequences (random, reverse, nearly sorted)
    algorithms  standard and hybrid merge engines
    bench       timing harness, sweeps, CSV reporting, experiment runner
    validate    oracle and property checks
"""

__version__ = "0.1.0"
