"""Tests for the bitwise correlation analysis."""

import numpy as np
import pytest

from bitbelay.analyses.base import digest_bits
from bitbelay.analyses.correlation import MODULE_NAME, BitwiseCorrelationTest
from bitbelay.errors import ConfigurationError, InvariantError
from bitbelay.hashers import Blake2bHasher, BuildHasher, ConstantHasher, Hasher, digest
from bitbelay.providers import AlphanumericProvider, Unsigned64BitProvider
from bitbelay.report import ModuleResult


class _MirroredHasher(Hasher):
    """BLAKE2b with bit 1 overwritten by a copy of bit 0."""

    def __init__(self):
        self._data = bytearray()

    def write(self, data):
        self._data += data

    def finish(self):
        h = digest(Blake2bHasher(), bytes(self._data))
        return (h & ~0b10) | ((h & 1) << 1)


class MirroredHasher(BuildHasher):
    name = "mirrored"

    def build_hasher(self):
        return _MirroredHasher()


class TestDigestBits:
    def test_extracts_lsb_first(self):
        bits = digest_bits([0x00, 0x01, 0x02, 0x03], 64)
        assert bits.shape == (4, 64)
        assert bits[:, 0].tolist() == [0, 1, 0, 1]
        assert bits[:, 1].tolist() == [0, 0, 1, 1]
        assert not bits[:, 2:].any()

    def test_top_bit(self):
        bits = digest_bits([1 << 63], 64)
        assert bits[0, 63] == 1
        assert bits[0].sum() == 1


class TestAccumulation:
    def test_threshold_range(self):
        with pytest.raises(ConfigurationError):
            BitwiseCorrelationTest(Blake2bHasher(), 1.5)

    def test_no_results_before_running(self):
        test = BitwiseCorrelationTest(Blake2bHasher(), 0.05)
        assert test.results() is None
        assert test.report_section().modules[0].result is ModuleResult.INCONCLUSIVE

    def test_runs_concatenate(self):
        test = BitwiseCorrelationTest(Blake2bHasher(), 0.05)
        test.run(AlphanumericProvider(8, seed=1), 100)
        test.run(Unsigned64BitProvider(2, seed=2), 50)
        assert test.samples == 150
        assert test.bit_values().shape == (64, 150)

    def test_bit_width(self):
        test = BitwiseCorrelationTest(Blake2bHasher(), 0.05, bits=8)
        test.run(AlphanumericProvider(8, seed=1), 100)
        assert test.results().matrix.shape == (8, 8)


class TestResults:
    @pytest.fixture
    def test(self):
        test = BitwiseCorrelationTest(Blake2bHasher(), 0.2)
        test.run(AlphanumericProvider(32, seed=3), 1000)
        return test

    def test_diagonal(self, test):
        results = test.results()
        for i in range(64):
            assert results.get(i, i) == 1.0

    def test_idempotent(self, test):
        assert np.array_equal(test.results().matrix, test.results().matrix)

    def test_as_dict(self, test):
        table = test.results().as_dict()
        assert len(table) == 64 * 64
        assert table[(3, 5)] == pytest.approx(table[(5, 3)])

    def test_out_of_range_pair(self, test):
        with pytest.raises(InvariantError):
            test.results().get(0, 64)

    def test_strong_hash_passes(self, test):
        module = test.report_section().modules[0]
        assert module.name == MODULE_NAME
        assert module.result is ModuleResult.PASS
        assert "All non-diagonals" in module.details
        assert module.details.count("* (") == 10

    def test_off_diagonal_sorted(self, test):
        values = [v for _, v in test.results().off_diagonal()]
        assert len(values) == 64 * 63
        assert values == sorted(values, reverse=True)


class TestVerdicts:
    def test_correlated_bits_fail(self):
        test = BitwiseCorrelationTest(MirroredHasher(), 0.5)
        test.run(AlphanumericProvider(16, seed=5), 500)
        module = test.report_section().modules[0]
        assert module.result is ModuleResult.FAIL
        assert "* (0, 1) => 1.0000" in module.details

    def test_constant_bits_are_inconclusive(self):
        test = BitwiseCorrelationTest(ConstantHasher(), 0.05)
        test.run(AlphanumericProvider(16, seed=5), 50)
        results = test.results()
        assert results.get(0, 0) is None
        assert len(results.undefined_pairs()) == 64 * 63
        module = test.report_section().modules[0]
        assert module.result is ModuleResult.INCONCLUSIVE
