"""Hash functions under test.

A :class:`BuildHasher` is a factory handed to every analysis; each digest is
computed on a fresh :class:`Hasher` so no state leaks between measurements.
Implement both classes to put your own hash function through the suites.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

from bitbelay.errors import InvariantError

MASK_64 = (1 << 64) - 1


class Hasher(ABC):
    """Streaming hasher: feed bytes with ``write``, read the digest with ``finish``."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        ...

    @abstractmethod
    def finish(self) -> int:
        """Return the digest as an unsigned integer of ``bits`` width."""
        ...


class BuildHasher(ABC):
    """Factory of fresh :class:`Hasher` instances."""

    name: str = "unnamed"
    description: str = ""
    bits: int = 64

    @abstractmethod
    def build_hasher(self) -> Hasher:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


def digest(build_hasher: BuildHasher, data: bytes) -> int:
    """Hash *data* with a freshly built hasher.

    Raises :class:`InvariantError` when the digest does not fit in the
    hasher's declared ``bits``.
    """
    hasher = build_hasher.build_hasher()
    hasher.write(data)
    value = int(hasher.finish())
    if not 0 <= value < 1 << build_hasher.bits:
        raise InvariantError(
            f"{build_hasher!r} returned {value:#x}, which is not an unsigned "
            f"{build_hasher.bits}-bit digest"
        )
    return value


# ── built-in hash ──


class _BufferedHasher(Hasher):
    """Collects every write and hashes the concatenation on ``finish``."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, data: bytes) -> None:
        self._buffer += data


class _SipHasher(_BufferedHasher):
    def finish(self) -> int:
        return hash(bytes(self._buffer)) & MASK_64


class SipHasher(BuildHasher):
    """CPython's ``hash()`` for bytes, seeded once per interpreter process."""

    name = "siphash"
    description = "Built-in bytes hash (SipHash on 64-bit CPython, randomised per process)"

    def build_hasher(self) -> Hasher:
        return _SipHasher()


# ── hashlib ──


class _HashlibHasher(Hasher):
    def __init__(self, state) -> None:
        self._state = state

    def write(self, data: bytes) -> None:
        self._state.update(data)

    def finish(self) -> int:
        return int.from_bytes(self._state.digest()[:8], "little")


class Blake2bHasher(BuildHasher):
    """BLAKE2b with an 8-byte digest, optionally keyed."""

    name = "blake2b"
    description = "BLAKE2b-64 from hashlib"

    def __init__(self, key: bytes = b"") -> None:
        self.key = key

    def build_hasher(self) -> Hasher:
        return _HashlibHasher(hashlib.blake2b(digest_size=8, key=self.key))


class Sha256Hasher(BuildHasher):
    """SHA-256 truncated to its first 64 bits."""

    name = "sha256"
    description = "SHA-256 truncated to 64 bits"

    def build_hasher(self) -> Hasher:
        return _HashlibHasher(hashlib.sha256())


# ── FNV-1a ──

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3


class _Fnv1aHasher(Hasher):
    def __init__(self) -> None:
        self._state = FNV_OFFSET_BASIS

    def write(self, data: bytes) -> None:
        h = self._state
        for byte in data:
            h = ((h ^ byte) * FNV_PRIME) & MASK_64
        self._state = h

    def finish(self) -> int:
        return self._state


class Fnv1aHasher(BuildHasher):
    """64-bit FNV-1a. Fast to write, weak high-bit diffusion."""

    name = "fnv1a"
    description = "64-bit Fowler-Noll-Vo (FNV-1a), pure Python"

    def build_hasher(self) -> Hasher:
        return _Fnv1aHasher()


# ── constant ──


class _ConstantHasher(Hasher):
    def __init__(self, value: int) -> None:
        self._value = value

    def write(self, data: bytes) -> None:
        pass

    def finish(self) -> int:
        return self._value


class ConstantHasher(BuildHasher):
    """Ignores its input entirely. The avalanche and chi-squared suites reject it."""

    name = "constant"
    description = "Always returns 42"

    def __init__(self, value: int = 42) -> None:
        self.value = value & MASK_64

    def build_hasher(self) -> Hasher:
        return _ConstantHasher(self.value)


ALL_HASHERS: dict[str, type[BuildHasher]] = {
    cls.name: cls
    for cls in (SipHasher, Blake2bHasher, Sha256Hasher, Fnv1aHasher, ConstantHasher)
}

DEFAULT_HASHER = SipHasher.name


def get_hasher(name: str) -> BuildHasher:
    """Instantiate a registered hasher by name."""
    try:
        return ALL_HASHERS[name]()
    except KeyError:
        raise KeyError(
            f"unknown hasher {name!r}; choose from {', '.join(sorted(ALL_HASHERS))}"
        ) from None
