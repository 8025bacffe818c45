"""The four hash quality analyses."""

from bitbelay.analyses.avalanche import AvalancheResults, Experiment, StrictAvalancheTest
from bitbelay.analyses.base import Analysis
from bitbelay.analyses.chi_squared import GoodnessOfFitTest
from bitbelay.analyses.correlation import BitwiseCorrelationTest, CorrelationResults
from bitbelay.analyses.performance import SpeedTest

__all__ = [
    "Analysis",
    "AvalancheResults",
    "BitwiseCorrelationTest",
    "CorrelationResults",
    "Experiment",
    "GoodnessOfFitTest",
    "SpeedTest",
    "StrictAvalancheTest",
]
