"""Run parameters and their validation.

Every test validates its own arguments through the ``require_*`` helpers so
that construction fails before any work is done. The frozen dataclasses below
bundle the defaults used by the command line for each suite.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bitbelay.errors import ConfigurationError

DEFAULT_DIGEST_BITS = 64
DEFAULT_BUCKETS = 256
MAX_DIGEST_BITS = 64

_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "kb": 10**3,
    "mb": 10**6,
    "gb": 10**9,
    "kib": 2**10,
    "mib": 2**20,
    "gib": 2**30,
}
_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")


def require_positive(field: str, value: int) -> int:
    if value is None or value <= 0:
        raise ConfigurationError(field, f"must be greater than zero (got {value})")
    return value


def require_non_negative(field: str, value: float) -> float:
    if value is None or value < 0:
        raise ConfigurationError(field, f"must not be negative (got {value})")
    return value


def require_fraction(field: str, value: float) -> float:
    """Accept values in the closed interval [0, 1]."""
    if value is None or not 0.0 <= value <= 1.0:
        raise ConfigurationError(field, f"must be within [0, 1] (got {value})")
    return value


def require_bits(value: int) -> int:
    if not 1 <= value <= MAX_DIGEST_BITS:
        raise ConfigurationError(
            "bits", f"must be within [1, {MAX_DIGEST_BITS}] (got {value})"
        )
    return value


def parse_data_size(text: str | int) -> int:
    """Parse a human data size such as ``"10 MB"`` or ``"4 KiB"`` into bytes."""
    if isinstance(text, int):
        return require_positive("data_size", text)
    match = _SIZE_RE.match(text)
    if match is None:
        raise ConfigurationError("data_size", f"cannot parse {text!r}")
    number, unit = match.groups()
    multiplier = _SIZE_UNITS.get(unit.lower())
    if multiplier is None:
        raise ConfigurationError("data_size", f"unknown unit {unit!r}")
    return require_positive("data_size", int(float(number) * multiplier))


# ── per-suite defaults ──


@dataclass(frozen=True)
class AvalancheConfig:
    experiments: int = 4096
    iterations_per_experiment: int = 4096
    max_deviance: float = 0.01

    def __post_init__(self) -> None:
        require_positive("experiments", self.experiments)
        require_positive("iterations_per_experiment", self.iterations_per_experiment)
        require_fraction("max_deviance", self.max_deviance)


@dataclass(frozen=True)
class ChiSquaredConfig:
    buckets: int = DEFAULT_BUCKETS
    iterations: int | None = None
    threshold: float = 0.05

    def __post_init__(self) -> None:
        require_positive("buckets", self.buckets)
        if self.iterations is None:
            # Roughly a thousand observations per bucket.
            object.__setattr__(self, "iterations", self.buckets * 1000)
        require_positive("iterations", self.iterations)
        require_fraction("threshold", self.threshold)


@dataclass(frozen=True)
class CorrelationConfig:
    iterations: int = 65536
    threshold: float = 0.05

    def __post_init__(self) -> None:
        require_positive("iterations", self.iterations)
        require_fraction("threshold", self.threshold)


@dataclass(frozen=True)
class PerformanceConfig:
    data_size: int = 10_000_000
    iterations: int = 256
    threshold: float = 1000.0

    def __post_init__(self) -> None:
        require_positive("data_size", self.data_size)
        require_positive("iterations", self.iterations)
        require_non_negative("threshold", self.threshold)
