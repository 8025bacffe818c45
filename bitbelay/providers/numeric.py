"""Random unsigned integers."""

from __future__ import annotations

import numpy as np

from bitbelay.config import require_positive
from bitbelay.providers.base import Provider

U64 = np.dtype("<u8")


class Unsigned64BitProvider(Provider):
    """``length`` uniform unsigned 64-bit integers, packed little-endian."""

    def __init__(
        self,
        length: int,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(rng=rng, seed=seed)
        self.length = require_positive("length", length)
        self.name = f"Unsigned 64-bit integers (n={length})"

    def provide(self, n: int) -> list[bytes]:
        values = self.rng.integers(
            0, np.iinfo(np.uint64).max, size=(n, self.length), dtype=np.uint64, endpoint=True
        )
        return [row.astype(U64).tobytes() for row in values]

    def bytes_per_input(self) -> int:
        return U64.itemsize * self.length
