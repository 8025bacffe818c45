"""
bitbelay: a quality harness for 64-bit hash functions.

Runs avalanche, chi-squared goodness of fit, bitwise correlation and
throughput analyses against any hash function exposed as a ``BuildHasher``.
"""

__version__ = "0.2.0"

from bitbelay.hashers import BuildHasher, Hasher
from bitbelay.providers import Provider
from bitbelay.report import Module, ModuleResult, Report, TestSection
from bitbelay.suites import AvalancheSuite, ChiSquaredSuite, CorrelationSuite, PerformanceSuite

__all__ = [
    "AvalancheSuite",
    "BuildHasher",
    "ChiSquaredSuite",
    "CorrelationSuite",
    "Hasher",
    "Module",
    "ModuleResult",
    "PerformanceSuite",
    "Provider",
    "Report",
    "TestSection",
    "__version__",
]
