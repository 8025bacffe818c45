"""Chi-squared goodness of fit of digests against uniform buckets."""

from __future__ import annotations

import logging

import numpy as np

from bitbelay import stats
from bitbelay.analyses.base import Analysis
from bitbelay.config import require_fraction, require_positive
from bitbelay.hashers import BuildHasher, digest
from bitbelay.providers.base import Provider
from bitbelay.report import Module, ModuleResult, TestSection, TestSectionBuilder

logger = logging.getLogger(__name__)

MODULE_NAME = "Failure to Reject the Null Hypothesis"


class GoodnessOfFitTest(Analysis):
    """Histogram of ``digest % buckets`` compared to a uniform distribution.

    The null hypothesis is that digests land in every bucket equally often.
    The test passes when the p-value is above ``threshold``, i.e. when there
    is not enough evidence to reject uniformity.
    """

    def __init__(
        self,
        build_hasher: BuildHasher,
        provider: Provider,
        buckets: int,
        threshold: float,
    ) -> None:
        self.build_hasher = build_hasher
        self.provider = provider
        self.buckets = np.zeros(require_positive("buckets", buckets), dtype=np.int64)
        self.threshold = require_fraction("threshold", threshold)
        self.iterations = 0

    @property
    def title(self) -> str:
        return f"Goodness of Fit / {self.provider.name} / {self.iterations} iterations"

    def single_iteration(self) -> None:
        data = self.provider.provide(1)[0]
        h = digest(self.build_hasher, data)
        logger.debug("Digest %#x", h)
        self.buckets[h % len(self.buckets)] += 1
        self.iterations += 1

    def run(self, iterations: int) -> None:
        for _ in range(require_positive("iterations", iterations)):
            self.single_iteration()

    def chi_squared(self) -> float | None:
        return stats.chi_squared_uniform(self.buckets)

    def p_value(self) -> float | None:
        """Goodness-of-fit p-value, or ``None`` while buckets are too sparse."""
        return stats.goodness_of_fit(self.buckets)

    def report_section(self) -> TestSection:
        p = self.p_value()
        if p is None:
            module = Module(
                ModuleResult.INCONCLUSIVE,
                MODULE_NAME,
                details=(
                    "The p-value was not able to be computed. At least "
                    f"{stats.MIN_EXPECTED_PER_BUCKET:.0f} observations per bucket are "
                    "needed on average."
                ),
            )
        elif p > self.threshold:
            module = Module(
                ModuleResult.PASS,
                MODULE_NAME,
                value=f"{p:.2f}",
                details=(
                    f"The p-value ({p:.4f}) is above the significance threshold "
                    f"({self.threshold}); uniformity cannot be rejected."
                ),
            )
        else:
            module = Module(
                ModuleResult.FAIL,
                MODULE_NAME,
                value=f"{p:.2f}",
                details=(
                    f"The p-value ({p:.4f}) is at or below the significance threshold "
                    f"({self.threshold}); the digests are not uniformly distributed."
                ),
            )
        return _report_base(self.title).push_module(module).build()


def _report_base(title: str) -> TestSectionBuilder:
    overview = (
        "Pearson's chi-squared goodness of fit test asks whether an observed "
        "frequency distribution is consistent with a theoretical one. Here the "
        "null hypothesis is that the observations follow a uniform distribution."
    )
    relation = (
        "A good hash function spreads its outputs evenly over the output space. "
        "Reducing digests into a fixed number of buckets and checking the bucket "
        "counts for uniformity is a direct check of that property, and mirrors "
        "how hash tables use digests."
    )
    algorithm = (
        "1. A number of buckets is chosen and every counter starts at zero.\n"
        "2. For each iteration a random input is drawn from the provider and hashed.\n"
        "3. The digest modulo the bucket count selects a bucket, whose counter is "
        "incremented.\n"
        "4. The chi-squared statistic of the counters against their mean is "
        "converted into a p-value with `buckets - 1` degrees of freedom."
    )
    interpretation = (
        "* A p-value **above** the significance threshold (typically 0.05) is "
        "good: there is _not_ enough evidence to reject uniformity.\n"
        "* A p-value **at or below** the threshold is bad: the bucket counts differ "
        "significantly from a uniform distribution."
    )
    sources = (
        "* https://en.wikipedia.org/wiki/Pearson%27s_chi-squared_test"
        "#Chi-squared_goodness_of_fit_test"
    )
    return (
        TestSectionBuilder()
        .title(title)
        .description(
            f"_Overview_\n\n{overview}\n\n_Relation to Hashing_\n\n{relation}\n\n"
            f"_Algorithm_\n\n{algorithm}\n\n_Interpretation_\n\n{interpretation}\n\n"
            f"_Sources_\n\n{sources}"
        )
    )
