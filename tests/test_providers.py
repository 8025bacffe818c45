"""Tests for data providers."""

import string

import numpy as np
import pytest

from bitbelay.errors import ConfigurationError
from bitbelay.providers import (
    AVAILABLE_PROVIDERS,
    DEFAULT_PROVIDER,
    AlphanumericProvider,
    Unsigned64BitProvider,
    make_provider,
)


class TestAlphanumeric:
    def test_shape(self):
        inputs = AlphanumericProvider(10, seed=1).provide(5)
        assert len(inputs) == 5
        assert all(len(x) == 10 for x in inputs)

    def test_charset(self):
        allowed = set((string.ascii_letters + string.digits).encode())
        for data in AlphanumericProvider(100, seed=2).provide(20):
            assert set(data) <= allowed

    def test_metadata(self):
        p = AlphanumericProvider(64)
        assert p.name == "ASCII Alphanumeric (64 characters)"
        assert p.bytes_per_input() == 64

    def test_seeded_is_reproducible(self):
        assert AlphanumericProvider(16, seed=5).provide(3) == AlphanumericProvider(16, seed=5).provide(3)

    def test_rejects_zero_length(self):
        with pytest.raises(ConfigurationError):
            AlphanumericProvider(0)


class TestUnsigned64Bit:
    def test_shape(self):
        p = Unsigned64BitProvider(4, seed=1)
        inputs = p.provide(3)
        assert len(inputs) == 3
        assert all(len(x) == p.bytes_per_input() == 32 for x in inputs)

    def test_metadata(self):
        assert Unsigned64BitProvider(8).name == "Unsigned 64-bit integers (n=8)"

    def test_little_endian_roundtrip(self):
        data = Unsigned64BitProvider(2, seed=9).provide(1)[0]
        values = np.frombuffer(data, dtype="<u8")
        assert data == values.tobytes()
        assert len(values) == 2

    def test_uses_high_bits(self):
        data = b"".join(Unsigned64BitProvider(64, seed=3).provide(4))
        values = np.frombuffer(data, dtype="<u8")
        assert np.any(values >= np.uint64(1 << 63))

    def test_shared_generator_advances(self):
        rng = np.random.default_rng(0)
        p = Unsigned64BitProvider(1, rng=rng)
        assert p.provide(1) != p.provide(1)


class TestRegistry:
    def test_default(self):
        assert DEFAULT_PROVIDER in AVAILABLE_PROVIDERS
        assert make_provider().bytes_per_input() == 64

    @pytest.mark.parametrize(
        "name, size",
        [
            ("ascii-alphanumeric-short", 8),
            ("ascii-alphanumeric-long", 4096),
            ("u64-short", 64),
            ("u64", 512),
        ],
    )
    def test_sizes(self, name, size):
        assert make_provider(name, seed=0).bytes_per_input() == size

    def test_unknown(self):
        with pytest.raises(KeyError, match="unknown provider"):
            make_provider("utf8")
