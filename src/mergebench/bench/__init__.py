"""
Benchmark harness.

    measure  timed trial sets and averaging
    sweep    prefix sweeps over one maximal sequence
    report   CSV report sink
    runner   YAML-driven experiment CLI
"""
