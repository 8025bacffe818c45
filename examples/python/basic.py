#!/usr/bin/env python3
"""Run every suite against BLAKE2b with small, fast settings.

Usage:
    pip install -e .
    python examples/python/basic.py
"""

import numpy as np
from rich.console import Console

from bitbelay import AvalancheSuite, ChiSquaredSuite, CorrelationSuite, PerformanceSuite
from bitbelay.hashers import Blake2bHasher
from bitbelay.providers import AlphanumericProvider, Unsigned64BitProvider
from bitbelay.render import render

hasher = Blake2bHasher()
rng = np.random.default_rng(7)
console = Console()

avalanche = AvalancheSuite.builder().build_hasher(hasher).build()
avalanche.run_strict_avalanche_criterion_test(
    AlphanumericProvider(64, rng=rng), experiments=8, iterations_per_experiment=2000,
    max_deviance=0.05, rng=rng,
)
render(avalanche.report(), console)

chi = ChiSquaredSuite.builder().build_hasher(hasher).buckets(64).build()
chi.run_goodness_of_fit(Unsigned64BitProvider(8, rng=rng), iterations=64_000, threshold=0.05)
render(chi.report(), console, descriptions=False)

correlation = CorrelationSuite.builder().build_hasher(hasher).build()
correlation.run_bitwise_test(AlphanumericProvider(64, rng=rng), iterations=20_000, threshold=0.05)
render(correlation.report(), console, descriptions=False)

performance = PerformanceSuite.builder().build_hasher(hasher).build()
performance.run_speed_test(Unsigned64BitProvider(4096, rng=rng), 16, 1_000_000, 100.0)
render(performance.report(), console, descriptions=False)
