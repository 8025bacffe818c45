"""Strict Avalanche Criterion (SAC).

Flipping any single input bit should flip every output bit with probability
one half. Each experiment starts from a random input, flips one random bit
per iteration and counts which digest bits changed compared to the previous
digest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from bitbelay.analyses.base import Analysis, digest_bits, inconclusive_section
from bitbelay.config import (
    DEFAULT_DIGEST_BITS,
    require_bits,
    require_fraction,
    require_positive,
)
from bitbelay.errors import EmptyDataError, InvariantError
from bitbelay.hashers import BuildHasher, digest
from bitbelay.providers.base import Provider
from bitbelay.report import Module, ModuleResult, TestSection, TestSectionBuilder

logger = logging.getLogger(__name__)

# Bias thresholds for the bit bias profile.
NEGLIGIBLE_BIAS = 0.01
NOTICEABLE_BIAS = 0.05
MOST_BIASED_SHOWN = 10


class Experiment:
    """A single input whose bits are flipped one at a time.

    Bit ``i`` of the input is bit ``i % 8`` (least significant first) of
    byte ``i // 8``.
    """

    def __init__(
        self,
        build_hasher: BuildHasher,
        data: bytes,
        rng: np.random.Generator,
        bits: int = DEFAULT_DIGEST_BITS,
    ) -> None:
        if len(data) == 0:
            raise EmptyDataError()
        self.build_hasher = build_hasher
        self.data = bytearray(data)
        self.rng = rng
        self.bits = require_bits(bits)

    @property
    def input_bits(self) -> int:
        return len(self.data) * 8

    def flip_bit(self, index: int) -> None:
        if not 0 <= index < self.input_bits:
            raise InvariantError(f"bit index {index} outside [0, {self.input_bits})")
        self.data[index // 8] ^= 1 << (index % 8)

    def flip_random_bit(self) -> int:
        """Flip a uniformly chosen input bit and return its index."""
        index = int(self.rng.integers(self.input_bits))
        self.flip_bit(index)
        return index

    def run(self, iterations: int) -> np.ndarray:
        """Run *iterations* flips and return per-output-bit flip counts."""
        require_positive("iterations", iterations)
        xors = np.empty(iterations, dtype=np.uint64)
        prior = digest(self.build_hasher, bytes(self.data))
        for i in range(iterations):
            self.flip_random_bit()
            current = digest(self.build_hasher, bytes(self.data))
            xors[i] = prior ^ current
            prior = current
        return digest_bits(xors, self.bits).sum(axis=0, dtype=np.int64)


@dataclass(frozen=True)
class AvalancheResults:
    """Per-bit bias snapshot of a :class:`StrictAvalancheTest`."""

    biases: np.ndarray
    max_deviance: float

    @property
    def max_bias_index(self) -> int:
        return int(np.argmax(self.biases))

    @property
    def max_bias(self) -> float:
        return float(self.biases[self.max_bias_index])

    @property
    def succeeded(self) -> bool:
        return self.max_bias <= self.max_deviance

    def most_biased(self, n: int = MOST_BIASED_SHOWN) -> list[tuple[int, float]]:
        """``(bit index, bias)`` pairs, most biased first."""
        order = np.argsort(-self.biases, kind="stable")[:n]
        return [(int(i), float(self.biases[i])) for i in order]


class StrictAvalancheTest(Analysis):
    """Accumulates bit flip counts across avalanche experiments."""

    title = "Strict Avalanche Criterion"

    def __init__(
        self,
        build_hasher: BuildHasher,
        provider: Provider,
        iterations_per_experiment: int,
        max_deviance: float,
        rng: np.random.Generator | None = None,
        bits: int = DEFAULT_DIGEST_BITS,
    ) -> None:
        self.build_hasher = build_hasher
        self.provider = provider
        self.iterations_per_experiment = require_positive(
            "iterations_per_experiment", iterations_per_experiment
        )
        self.max_deviance = require_fraction("max_deviance", max_deviance)
        self.bits = require_bits(bits)
        self.rng = rng if rng is not None else np.random.default_rng()

        self.bit_flips = np.zeros(self.bits, dtype=np.int64)
        self.total_experiments = 0
        self.total_iterations = 0

    def run_single_experiment(self) -> None:
        data = self.provider.provide(1)[0]
        experiment = Experiment(self.build_hasher, data, self.rng, self.bits)
        logger.debug(
            "Experiment %d: %d input bits", self.total_experiments + 1, experiment.input_bits
        )
        self.bit_flips += experiment.run(self.iterations_per_experiment)
        self.total_experiments += 1
        self.total_iterations += self.iterations_per_experiment

    def results(self) -> AvalancheResults | None:
        """Per-bit bias summary, or ``None`` before the first experiment."""
        if self.total_experiments == 0:
            return None
        fractions = self.bit_flips / (self.total_experiments * self.iterations_per_experiment)
        return AvalancheResults(np.abs(fractions - 0.5), self.max_deviance)

    def report_section(self) -> TestSection:
        builder = _report_base()
        results = self.results()
        if results is None:
            return inconclusive_section(builder, self.title, "No experiments have been run.")

        if results.succeeded:
            result = ModuleResult.PASS
            summary = (
                f"The bias for every bit fell within a range of 0.5 ± {self.max_deviance}."
            )
        else:
            result = ModuleResult.FAIL
            summary = (
                f"At least one bit had a bias that fell outside the range of "
                f"0.5 ± {self.max_deviance}. Bit {results.max_bias_index} had the "
                f"largest bias offset of {results.max_bias * 100:.2f}%."
            )

        lines = [
            summary,
            "",
            "_Bit Bias Profile_",
            "",
            f"`{bias_profile(results.biases)}`",
            "",
            "_Most Biased Bits_",
            "",
        ]
        for index, bias in results.most_biased():
            lines.append(f"* Index {index:>2} had a bias offset of {bias * 100:.2f}%.")

        return builder.push_module(
            Module(result, self.title, details="\n".join(lines))
        ).build()


def bias_profile(biases: np.ndarray) -> str:
    """One character per bit: ``.`` negligible, ``?`` noticeable, ``!`` strong."""
    chars = []
    for bias in biases:
        if bias <= NEGLIGIBLE_BIAS:
            chars.append(".")
        elif bias <= NOTICEABLE_BIAS:
            chars.append("?")
        else:
            chars.append("!")
    return "[" + "".join(chars) + "]"


def _report_base() -> TestSectionBuilder:
    overview = (
        "The Strict Avalanche Criterion (SAC) checks whether a hash function shows "
        "strong avalanching: a small change to the input should cause a large, "
        "unpredictable change to the output. Weak avalanching points to poor mixing "
        "and makes the function easier to attack.\n\n"
        "Concretely, when one randomly chosen input bit is flipped, each output bit "
        "should flip with probability one half, with no preference for any position."
    )
    algorithm = (
        "Several experiments are run. Each one:\n\n"
        "1. Draws a random starting input from the provider.\n"
        "2. For a fixed number of iterations, hashes the current input, flips one "
        "random input bit, hashes again and adds one to the counter of every output "
        "bit that differs between the two digests.\n\n"
        "Finally the fraction of iterations in which each output bit flipped is "
        "computed. A well-mixed function keeps every fraction close to 50%."
    )
    interpretation = (
        "* Every output bit must stay within 50% ± the configured tolerance for the "
        "test to pass.\n"
        "* The bit bias profile marks each output bit as negligible (`.`), "
        "noticeable (`?`) or strong (`!`).\n"
        "* The most biased bits are listed with their exact offsets."
    )
    return (
        TestSectionBuilder()
        .title(StrictAvalancheTest.title)
        .description(
            f"_Overview_\n\n{overview}\n\n_Algorithm_\n\n{algorithm}\n\n"
            f"_Interpretation_\n\n{interpretation}"
        )
    )
