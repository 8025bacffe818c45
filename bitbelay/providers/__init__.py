"""Data provider implementations."""

from __future__ import annotations

import numpy as np

from bitbelay.providers.ascii import AlphanumericProvider
from bitbelay.providers.base import Provider
from bitbelay.providers.numeric import Unsigned64BitProvider

# Input sizes, as powers of two of the provider's unit (characters or integers).
SHORT_BITS = 3
MEDIUM_BITS = 6
LONG_BITS = 12

AVAILABLE_PROVIDERS: dict[str, tuple[type[Provider], int]] = {
    "ascii-alphanumeric": (AlphanumericProvider, 1 << MEDIUM_BITS),
    "ascii-alphanumeric-long": (AlphanumericProvider, 1 << LONG_BITS),
    "ascii-alphanumeric-short": (AlphanumericProvider, 1 << SHORT_BITS),
    "u64": (Unsigned64BitProvider, 1 << MEDIUM_BITS),
    "u64-long": (Unsigned64BitProvider, 1 << LONG_BITS),
    "u64-short": (Unsigned64BitProvider, 1 << SHORT_BITS),
}

DEFAULT_PROVIDER = "ascii-alphanumeric"


def make_provider(
    name: str = DEFAULT_PROVIDER, seed: int | np.random.SeedSequence | None = None
) -> Provider:
    """Build a registered provider, optionally seeding its generator."""
    try:
        cls, length = AVAILABLE_PROVIDERS[name]
    except KeyError:
        raise KeyError(
            f"unknown provider {name!r}; choose from {', '.join(AVAILABLE_PROVIDERS)}"
        ) from None
    return cls(length, seed=seed)


__all__ = [
    "AVAILABLE_PROVIDERS",
    "AlphanumericProvider",
    "DEFAULT_PROVIDER",
    "LONG_BITS",
    "MEDIUM_BITS",
    "Provider",
    "SHORT_BITS",
    "Unsigned64BitProvider",
    "make_provider",
]
