"""Abstract base class for all data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Provider(ABC):
    """Base class for a source of hash-function inputs.

    Every input produced by a provider has the same byte length, reported by
    ``bytes_per_input``. Randomness comes from an explicit
    :class:`numpy.random.Generator` so that runs can be reproduced from a seed.
    """

    name: str = "unnamed"

    def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @abstractmethod
    def provide(self, n: int) -> list[bytes]:
        """Generate *n* inputs.

        Parameters
        ----------
        n:
            Number of inputs requested.

        Returns
        -------
        list[bytes]
            Exactly *n* byte strings, each ``bytes_per_input()`` long.
        """
        ...

    @abstractmethod
    def bytes_per_input(self) -> int:
        """Encoded byte length of every input (not the character count)."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
