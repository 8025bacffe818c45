"""Suites: repeated runs of one kind of analysis against one hash function.

Each suite keeps its completed tests in the order they were run and turns
them into a :class:`~bitbelay.report.Report` on demand.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Generic, TypeVar

import numpy as np

from bitbelay.analyses import (
    Analysis,
    BitwiseCorrelationTest,
    GoodnessOfFitTest,
    SpeedTest,
    StrictAvalancheTest,
)
from bitbelay.builder import FieldBuilder
from bitbelay.config import DEFAULT_BUCKETS, require_positive
from bitbelay.errors import InvariantError
from bitbelay.hashers import BuildHasher
from bitbelay.providers.base import Provider
from bitbelay.report import Report, ReportBuilder

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1000
T = TypeVar("T", bound=Analysis)


class Suite(ABC, Generic[T]):
    """Ordered collection of completed analyses sharing one hash function."""

    title: str = "unnamed"

    def __init__(self, build_hasher: BuildHasher) -> None:
        self.build_hasher = build_hasher
        self.tests: list[T] = []

    def report(self) -> Report:
        if not self.tests:
            raise InvariantError(f"the {self.title} suite has no completed tests to report")
        builder = ReportBuilder().title(self.title)
        for test in self.tests:
            builder.push_section(test.report_section())
        return builder.build()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} tests={len(self.tests)}>"


class SuiteBuilder(FieldBuilder):
    """Builds a suite once its hash function has been supplied."""

    def __init__(self, suite_cls: type[Suite]) -> None:
        super().__init__()
        self._suite_cls = suite_cls

    def build_hasher(self, build_hasher: BuildHasher) -> SuiteBuilder:
        return self._set("build_hasher", build_hasher)

    def build(self) -> Suite:
        return self._suite_cls(self._require("build_hasher"))


# ═══════════════════════ AVALANCHE ═══════════════════════

class AvalancheSuite(Suite[StrictAvalancheTest]):
    title = "Avalanching"

    @classmethod
    def builder(cls) -> SuiteBuilder:
        return SuiteBuilder(cls)

    def run_strict_avalanche_criterion_test(
        self,
        provider: Provider,
        experiments: int,
        iterations_per_experiment: int,
        max_deviance: float,
        rng: np.random.Generator | None = None,
    ) -> StrictAvalancheTest:
        test = StrictAvalancheTest(
            self.build_hasher,
            provider,
            iterations_per_experiment,
            max_deviance,
            rng=rng,
            bits=self.build_hasher.bits,
        )
        for i in range(1, require_positive("experiments", experiments) + 1):
            if i % PROGRESS_EVERY == 0:
                logger.info("Running experiment %d of %d.", i, experiments)
            test.run_single_experiment()
        self.tests.append(test)
        return test


# ═══════════════════════ CHI SQUARED ═══════════════════════

class ChiSquaredSuiteBuilder(SuiteBuilder):
    def __init__(self) -> None:
        super().__init__(ChiSquaredSuite)

    def buckets(self, buckets: int) -> ChiSquaredSuiteBuilder:
        return self._set("buckets", buckets)

    def build(self) -> ChiSquaredSuite:
        return ChiSquaredSuite(
            self._require("build_hasher"), buckets=self._optional("buckets", DEFAULT_BUCKETS)
        )


class ChiSquaredSuite(Suite[GoodnessOfFitTest]):
    title = "Chi Squared"

    def __init__(self, build_hasher: BuildHasher, buckets: int = DEFAULT_BUCKETS) -> None:
        super().__init__(build_hasher)
        self.buckets = require_positive("buckets", buckets)

    @classmethod
    def builder(cls) -> ChiSquaredSuiteBuilder:
        return ChiSquaredSuiteBuilder()

    def run_goodness_of_fit(
        self, provider: Provider, iterations: int, threshold: float
    ) -> GoodnessOfFitTest:
        test = GoodnessOfFitTest(self.build_hasher, provider, self.buckets, threshold)
        for i in range(1, require_positive("iterations", iterations) + 1):
            if i % PROGRESS_EVERY == 0:
                logger.info("Running iteration %d of %d.", i, iterations)
            test.single_iteration()
        for index, count in enumerate(test.buckets):
            logger.debug("Bucket %d: %d", index, count)
        self.tests.append(test)
        return test


# ═══════════════════════ CORRELATION ═══════════════════════

class CorrelationSuite(Suite[BitwiseCorrelationTest]):
    title = "Correlation"

    @classmethod
    def builder(cls) -> SuiteBuilder:
        return SuiteBuilder(cls)

    def run_bitwise_test(
        self, provider: Provider, iterations: int, threshold: float
    ) -> BitwiseCorrelationTest:
        test = BitwiseCorrelationTest(
            self.build_hasher, threshold, bits=self.build_hasher.bits
        )
        logger.info("Hashing %d inputs from %s.", iterations, provider.name)
        test.run(provider, iterations)
        self.tests.append(test)
        return test


# ═══════════════════════ PERFORMANCE ═══════════════════════

class PerformanceSuite(Suite[SpeedTest]):
    title = "Performance"

    @classmethod
    def builder(cls) -> SuiteBuilder:
        return SuiteBuilder(cls)

    def run_speed_test(
        self, provider: Provider, iterations: int, data_size: int, threshold: float
    ) -> SpeedTest:
        test = SpeedTest(self.build_hasher, provider, data_size, threshold)
        test.run(iterations)
        self.tests.append(test)
        return test
