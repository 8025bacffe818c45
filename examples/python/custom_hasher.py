#!/usr/bin/env python3
"""Drive the bitbelay command line with your own hash function.

This hasher ignores its input and always returns 42. The avalanche and
chi-squared suites fail it, correlation is inconclusive because no bit ever
changes, and performance usually passes because there is no work to time.

Usage:
    python examples/python/custom_hasher.py avalanche -e 4 -i 100
"""

from bitbelay.cli import run
from bitbelay.hashers import BuildHasher, Hasher


class FortyTwoHasher(Hasher):
    def write(self, data: bytes) -> None:
        pass

    def finish(self) -> int:
        return 42


class BuildFortyTwoHasher(BuildHasher):
    name = "forty-two"
    description = "The answer to everything"

    def build_hasher(self) -> Hasher:
        return FortyTwoHasher()


if __name__ == "__main__":
    run(BuildFortyTwoHasher())
