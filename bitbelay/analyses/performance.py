"""Hashing throughput."""

from __future__ import annotations

import logging
import time

import numpy as np

from bitbelay.analyses.base import Analysis, inconclusive_section
from bitbelay.config import require_non_negative, require_positive
from bitbelay.hashers import BuildHasher
from bitbelay.providers.base import Provider
from bitbelay.report import Module, ModuleResult, TestSection, TestSectionBuilder

logger = logging.getLogger(__name__)


def timed_hash(build_hasher: BuildHasher, data: bytes) -> float:
    """Hash *data* once and return the throughput in MB/sec.

    Only the ``write`` and ``finish`` calls are inside the timed region.
    """
    hasher = build_hasher.build_hasher()
    start = time.perf_counter_ns()
    hasher.write(data)
    result = hasher.finish()
    elapsed = max(time.perf_counter_ns() - start, 1)
    logger.debug("Hashing result: %#x", result)
    return (len(data) / 1e6) / (elapsed / 1e9)


class SpeedTest(Analysis):
    """Throughput samples for hashing a buffer of roughly ``data_size`` bytes."""

    title = "Speed Test"

    def __init__(
        self,
        build_hasher: BuildHasher,
        provider: Provider,
        data_size: int,
        threshold: float,
    ) -> None:
        self.build_hasher = build_hasher
        self.provider = provider
        self.data_size = require_positive("data_size", data_size)
        self.threshold = require_non_negative("threshold", threshold)
        self.data = bytearray()
        self.samples: list[float] = []

    def rehydrate(self) -> None:
        """Rebuild the buffer from fresh provider output.

        The buffer may overshoot ``data_size`` by less than one input.
        """
        self.data.clear()
        while len(self.data) < self.data_size:
            self.data += self.provider.provide(1)[0]

    def run(self, iterations: int) -> None:
        for i in range(1, require_positive("iterations", iterations) + 1):
            self.rehydrate()
            speed = timed_hash(self.build_hasher, bytes(self.data))
            logger.info("Iteration %d: %.2f MB/sec", i, speed)
            self.samples.append(speed)

    def summary(self) -> tuple[float, float, float] | None:
        """``(mean, median, std_dev)`` of the samples in MB/sec."""
        if not self.samples:
            return None
        samples = np.asarray(self.samples)
        std = float(np.std(samples, ddof=1)) if len(samples) > 1 else 0.0
        return float(np.mean(samples)), float(np.median(samples)), std

    def report_section(self) -> TestSection:
        builder = _report_base()
        summary = self.summary()
        if summary is None:
            return inconclusive_section(builder, "Average Speed", "No timings have been recorded.")
        mean, median, std = summary

        def verdict(value: float) -> ModuleResult:
            return ModuleResult.PASS if value >= self.threshold else ModuleResult.FAIL

        return (
            builder.push_module(
                Module(verdict(mean), "Average Speed", value=f"{mean:.2f} Mb/sec ± {std:.2f} Mb/sec")
            )
            .push_module(Module(verdict(median), "Median Speed", value=f"{median:.2f} Mb/sec"))
            .build()
        )


def _report_base() -> TestSectionBuilder:
    return (
        TestSectionBuilder()
        .title(SpeedTest.title)
        .description(
            "Runs a set of speed tests for a hash function, including:\n\n"
            "* Comparison of the mean speed against a predetermined threshold.\n"
            "* Comparison of the median speed against a predetermined threshold."
        )
    )
