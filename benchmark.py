#!/usr/bin/env python3
"""
Throughput comparison of every registered hasher.

Runs the performance suite once per hasher on identical input and prints a
ranked table.
"""

import argparse

from rich.console import Console
from rich.table import Table

from bitbelay.hashers import ALL_HASHERS
from bitbelay.providers import Unsigned64BitProvider
from bitbelay.suites import PerformanceSuite


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-size", type=int, default=1_000_000)
    parser.add_argument("--iterations", type=int, default=32)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    rows = []
    for name, cls in sorted(ALL_HASHERS.items()):
        suite = PerformanceSuite(cls())
        test = suite.run_speed_test(
            Unsigned64BitProvider(4096, seed=args.seed), args.iterations, args.data_size, 0.0
        )
        mean, median, std = test.summary()
        rows.append((name, mean, median, std))

    table = Table(title=f"Hasher throughput ({args.data_size:,} bytes x {args.iterations})")
    table.add_column("Rank", justify="right")
    table.add_column("Hasher")
    table.add_column("Mean MB/s", justify="right")
    table.add_column("Median MB/s", justify="right")
    table.add_column("Std dev", justify="right")
    for rank, (name, mean, median, std) in enumerate(sorted(rows, key=lambda r: -r[1]), 1):
        table.add_row(str(rank), name, f"{mean:,.1f}", f"{median:,.1f}", f"{std:,.1f}")
    Console().print(table)


if __name__ == "__main__":
    main()
