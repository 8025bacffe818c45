"""Random ASCII strings."""

from __future__ import annotations

import string

import numpy as np

from bitbelay.config import require_positive
from bitbelay.providers.base import Provider

ALPHANUMERIC = np.frombuffer(
    (string.ascii_letters + string.digits).encode("ascii"), dtype=np.uint8
)


class AlphanumericProvider(Provider):
    """Fixed-length strings drawn uniformly from ``[A-Za-z0-9]``."""

    def __init__(
        self,
        length: int,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(rng=rng, seed=seed)
        self.length = require_positive("length", length)
        self.name = f"ASCII Alphanumeric ({length} characters)"

    def provide(self, n: int) -> list[bytes]:
        chars = self.rng.choice(ALPHANUMERIC, size=(n, self.length))
        return [row.tobytes() for row in chars]

    def bytes_per_input(self) -> int:
        # One byte per character, all of them ASCII.
        return self.length
