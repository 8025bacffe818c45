"""Common interface for the analyses."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from bitbelay.report import Module, ModuleResult, TestSection, TestSectionBuilder


class Analysis(ABC):
    """A stateful measurement that can summarise itself as a report section."""

    title: str = "unnamed"

    @abstractmethod
    def report_section(self) -> TestSection:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} title={self.title!r}>"


def digest_bits(digests: Sequence[int] | np.ndarray, bits: int) -> np.ndarray:
    """Unpack digests into a ``(len(digests), bits)`` array of 0/1.

    Column ``i`` holds bit ``i`` of each digest, least significant first.
    """
    values = np.asarray(digests, dtype=np.uint64)
    shifts = np.arange(bits, dtype=np.uint64)
    return ((values[:, None] >> shifts) & np.uint64(1)).astype(np.uint8)


def inconclusive_section(builder: TestSectionBuilder, name: str, reason: str) -> TestSection:
    return builder.push_module(Module(ModuleResult.INCONCLUSIVE, name, details=reason)).build()
