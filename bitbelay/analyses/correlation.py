"""Pairwise Pearson correlation between digest bits."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from bitbelay import stats
from bitbelay.analyses.base import Analysis, digest_bits, inconclusive_section
from bitbelay.config import DEFAULT_DIGEST_BITS, require_bits, require_fraction, require_positive
from bitbelay.errors import InvariantError
from bitbelay.hashers import BuildHasher, digest
from bitbelay.providers.base import Provider
from bitbelay.report import Module, ModuleResult, TestSection, TestSectionBuilder

logger = logging.getLogger(__name__)

MODULE_NAME = "Pearson correlation threshold"
STRONGEST_SHOWN = 10


@dataclass(frozen=True)
class CorrelationResults:
    """Bit-by-bit correlation matrix; ``nan`` marks undefined pairs."""

    matrix: np.ndarray

    @property
    def bits(self) -> int:
        return self.matrix.shape[0]

    def get(self, i: int, j: int) -> float | None:
        if not (0 <= i < self.bits and 0 <= j < self.bits):
            raise InvariantError(f"bit pair ({i}, {j}) outside [0, {self.bits})")
        value = self.matrix[i, j]
        return None if np.isnan(value) else float(value)

    def as_dict(self) -> dict[tuple[int, int], float | None]:
        return {(i, j): self.get(i, j) for i in range(self.bits) for j in range(self.bits)}

    def undefined_pairs(self) -> list[tuple[int, int]]:
        rows, cols = np.nonzero(np.isnan(self.matrix))
        return [(int(i), int(j)) for i, j in zip(rows, cols) if i != j]

    def off_diagonal(self) -> list[tuple[tuple[int, int], float]]:
        """Defined off-diagonal ``|r|`` values, strongest first."""
        mask = ~np.eye(self.bits, dtype=bool) & ~np.isnan(self.matrix)
        rows, cols = np.nonzero(mask)
        magnitudes = np.abs(self.matrix[rows, cols])
        order = np.argsort(-magnitudes, kind="stable")
        return [((int(rows[k]), int(cols[k])), float(magnitudes[k])) for k in order]


class BitwiseCorrelationTest(Analysis):
    """Collects every digest bit across many inputs and correlates each pair."""

    title = "Bitwise Pearson Correlation"

    def __init__(
        self,
        build_hasher: BuildHasher,
        threshold: float,
        bits: int = DEFAULT_DIGEST_BITS,
    ) -> None:
        self.build_hasher = build_hasher
        self.threshold = require_fraction("threshold", threshold)
        self.bits = require_bits(bits)
        self._chunks: list[np.ndarray] = []

    @property
    def samples(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    def bit_values(self) -> np.ndarray:
        """``(bits, samples)`` float array; row ``i`` holds bit ``i`` of every digest."""
        if not self._chunks:
            return np.empty((self.bits, 0), dtype=np.float64)
        return np.concatenate(self._chunks).T.astype(np.float64)

    def run(self, provider: Provider, iterations: int) -> None:
        inputs = provider.provide(require_positive("iterations", iterations))
        digests = [digest(self.build_hasher, data) for data in inputs]
        logger.info("Extracting bit values across %d %d-bit hashes.", len(digests), self.bits)
        self._chunks.append(digest_bits(digests, self.bits))

    def results(self) -> CorrelationResults | None:
        if not self._chunks:
            return None
        return CorrelationResults(stats.pearson_matrix(self.bit_values()))

    def report_section(self) -> TestSection:
        builder = _report_base()
        results = self.results()
        if results is None:
            return inconclusive_section(builder, MODULE_NAME, "No hashes have been collected.")

        off_diagonal = results.off_diagonal()
        undefined = results.undefined_pairs()

        if any(value >= self.threshold for _, value in off_diagonal):
            result = ModuleResult.FAIL
            summary = (
                "One or more non-diagonals had a correlation greater than or equal "
                "to the threshold."
            )
        elif undefined:
            result = ModuleResult.INCONCLUSIVE
            summary = (
                f"{len(undefined)} bit pairs had no defined correlation because at "
                "least one of the bits never changed."
            )
        else:
            result = ModuleResult.PASS
            summary = "All non-diagonals had a correlation lower than the threshold."

        lines = [summary, "", "Maximum correlation values:", ""]
        for (i, j), value in off_diagonal[:STRONGEST_SHOWN]:
            lines.append(f"* ({i}, {j}) => {value:.4f}")

        return builder.push_module(
            Module(result, MODULE_NAME, value=str(self.threshold), details="\n".join(lines))
        ).build()


def _report_base() -> TestSectionBuilder:
    overview = (
        "The bitwise correlation test measures the Pearson correlation between "
        "every pair of output bits (bit-bit comparisons) over a set of digests."
    )
    algorithm = (
        "1. Random inputs are drawn from the provider and hashed. Think of the "
        "result as a matrix with one row per digest and one column per bit.\n"
        "2. The matrix is transposed so every bit position has an array holding its "
        "value in each digest.\n"
        "3. The Pearson correlation is computed for every pair of bit positions. "
        "Although the correlation is symmetric, all pairs are computed."
    )
    interpretation = (
        "* A good result has no strong correlation between distinct bits, meaning "
        "the bits behave independently.\n"
        "* The diagonal is the exception: a bit compared with itself always "
        "correlates at exactly 1.0, which serves as a sanity check."
    )
    sources = "* https://en.wikipedia.org/wiki/Pearson_correlation_coefficient"
    return (
        TestSectionBuilder()
        .title(BitwiseCorrelationTest.title)
        .description(
            f"_Overview_\n\n{overview}\n\n_Algorithm_\n\n{algorithm}\n\n"
            f"_Interpretation_\n\n{interpretation}\n\n_Sources_\n\n{sources}"
        )
    )
