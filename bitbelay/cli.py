"""CLI for bitbelay."""

from __future__ import annotations

import logging
from pathlib import Path

import click
import numpy as np
from rich.console import Console
from rich.logging import RichHandler

from bitbelay import __version__
from bitbelay.config import (
    AvalancheConfig,
    ChiSquaredConfig,
    DEFAULT_BUCKETS,
    CorrelationConfig,
    PerformanceConfig,
    parse_data_size,
)
from bitbelay.errors import ConfigurationError
from bitbelay.hashers import ALL_HASHERS, DEFAULT_HASHER, BuildHasher, get_hasher
from bitbelay.providers import AVAILABLE_PROVIDERS, DEFAULT_PROVIDER, make_provider
from bitbelay.render import render, render_correlation_matrix, to_markdown
from bitbelay.report import Report

logger = logging.getLogger("bitbelay")


class DataSize(click.ParamType):
    """A byte count such as ``10 MB`` or ``512 KiB``."""

    name = "size"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return parse_data_size(value)
        except ConfigurationError as e:
            self.fail(str(e), param, ctx)


@click.group()
@click.version_option(__version__)
@click.option("--hasher", "hasher_name", type=click.Choice(sorted(ALL_HASHERS)),
              default=DEFAULT_HASHER, show_default=True, help="Hash function under test.")
@click.option("--provider", "provider_name", type=click.Choice(list(AVAILABLE_PROVIDERS)),
              default=DEFAULT_PROVIDER, show_default=True, help="Source of hash inputs.")
@click.option("--seed", default=None, type=int, help="Seed for every random generator.")
@click.option("-v", "--verbose", is_flag=True, help="Log progress (INFO).")
@click.option("--trace", is_flag=True, help="Log every step (DEBUG).")
@click.pass_context
def main(ctx: click.Context, hasher_name: str, provider_name: str, seed: int | None,
         verbose: bool, trace: bool) -> None:
    """🔬 bitbelay: statistical quality checks for 64-bit hash functions."""
    level = logging.DEBUG if trace else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

    ctx.ensure_object(dict)
    if "build_hasher" not in ctx.obj:
        ctx.obj["build_hasher"] = get_hasher(hasher_name)
    ctx.obj["provider_name"] = provider_name
    ctx.obj["seeds"] = np.random.SeedSequence(seed)
    ctx.obj["verbose"] = verbose or trace


def run(build_hasher: BuildHasher, args: list[str] | None = None) -> None:
    """Run the command line against a custom hash function.

    Example::

        from bitbelay.cli import run
        run(MyBuildHasher())
    """
    main(args=args, obj={"build_hasher": build_hasher})


# ────────────────────────────────────────────────────────────
# Suites
# ────────────────────────────────────────────────────────────

_output_option = click.option(
    "--output", "output_path", default=None, type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the report as Markdown to this path.",
)


@main.command()
@click.option("-e", "--experiments", default=4096, show_default=True,
              help="Number of experiments to run.")
@click.option("-i", "--iterations-per-experiment", default=4096, show_default=True,
              help="Bit flips per experiment.")
@click.option("-m", "--max-deviance", default=0.01, show_default=True,
              help="Allowed deviation of any bit's flip rate from 0.5.")
@_output_option
@click.pass_obj
def avalanche(obj: dict, experiments: int, iterations_per_experiment: int,
              max_deviance: float, output_path: Path | None) -> None:
    """Strict Avalanche Criterion."""
    from bitbelay.suites import AvalancheSuite

    config = _validated(AvalancheConfig, experiments=experiments,
                        iterations_per_experiment=iterations_per_experiment,
                        max_deviance=max_deviance)
    suite = AvalancheSuite.builder().build_hasher(obj["build_hasher"]).build()
    suite.run_strict_avalanche_criterion_test(
        _provider(obj), config.experiments, config.iterations_per_experiment,
        config.max_deviance, rng=np.random.default_rng(obj["seeds"].spawn(1)[0]),
    )
    _emit(suite.report(), output_path)


@main.command("chi-squared")
@click.option("-b", "--buckets", default=DEFAULT_BUCKETS, show_default=True,
              help="Number of buckets.")
@click.option("-i", "--iterations", default=None, type=int,
              help="Inputs to hash (default: 1000 per bucket).")
@click.option("-t", "--threshold", default=0.05, show_default=True,
              help="Significance threshold for the p-value.")
@_output_option
@click.pass_obj
def chi_squared(obj: dict, buckets: int, iterations: int | None, threshold: float,
                output_path: Path | None) -> None:
    """Chi-squared goodness of fit against a uniform distribution."""
    from bitbelay.suites import ChiSquaredSuite

    config = _validated(ChiSquaredConfig, buckets=buckets, iterations=iterations,
                        threshold=threshold)
    suite = (
        ChiSquaredSuite.builder()
        .build_hasher(obj["build_hasher"])
        .buckets(config.buckets)
        .build()
    )
    suite.run_goodness_of_fit(_provider(obj), config.iterations, config.threshold)
    _emit(suite.report(), output_path)


@main.command()
@click.option("-i", "--iterations", default=65536, show_default=True, help="Inputs to hash.")
@click.option("-t", "--threshold", default=0.05, show_default=True,
              help="Largest acceptable off-diagonal |r|.")
@click.option("--correlation-matrix", is_flag=True, help="Print the bit correlation matrix.")
@click.option("--cell-width", default=2, show_default=True, type=click.IntRange(min=2),
              help="Width of each matrix cell.")
@_output_option
@click.pass_obj
def correlation(obj: dict, iterations: int, threshold: float, correlation_matrix: bool,
                cell_width: int, output_path: Path | None) -> None:
    """Pairwise Pearson correlation between output bits."""
    from bitbelay.suites import CorrelationSuite

    config = _validated(CorrelationConfig, iterations=iterations, threshold=threshold)
    suite = CorrelationSuite.builder().build_hasher(obj["build_hasher"]).build()
    test = suite.run_bitwise_test(_provider(obj), config.iterations, config.threshold)
    if correlation_matrix:
        render_correlation_matrix(test.results().matrix, Console(), cell_width=cell_width)
    _emit(suite.report(), output_path)


@main.command()
@click.option("-s", "--data-size", default="10 MB", show_default=True, type=DataSize(),
              help="Bytes hashed per iteration.")
@click.option("-i", "--iterations", default=256, show_default=True, help="Timed iterations.")
@click.option("-t", "--threshold", default=1000.0, show_default=True,
              help="Minimum acceptable throughput in MB/sec.")
@_output_option
@click.pass_obj
def performance(obj: dict, data_size: int, iterations: int, threshold: float,
                output_path: Path | None) -> None:
    """Hashing throughput."""
    from bitbelay.suites import PerformanceSuite

    if obj["verbose"]:
        click.echo("Warning: verbose logging adds overhead and skews timings.", err=True)
    config = _validated(PerformanceConfig, data_size=data_size, iterations=iterations,
                        threshold=threshold)
    suite = PerformanceSuite.builder().build_hasher(obj["build_hasher"]).build()
    suite.run_speed_test(_provider(obj), config.iterations, config.data_size, config.threshold)
    _emit(suite.report(), output_path)


# ────────────────────────────────────────────────────────────
# Discovery
# ────────────────────────────────────────────────────────────


@main.command("list")
def list_() -> None:
    """List available hashers and providers."""
    click.echo(f"Hashers ({len(ALL_HASHERS)}):\n")
    for name, cls in sorted(ALL_HASHERS.items()):
        marker = "*" if name == DEFAULT_HASHER else " "
        click.echo(f"  {marker} {name:<12} {cls.description}")
    click.echo(f"\nProviders ({len(AVAILABLE_PROVIDERS)}):\n")
    for name, (cls, length) in AVAILABLE_PROVIDERS.items():
        marker = "*" if name == DEFAULT_PROVIDER else " "
        click.echo(f"  {marker} {name:<26} {cls(length).name}")


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _validated(config_cls, **kwargs):
    try:
        return config_cls(**kwargs)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint=f"--{e.field.replace('_', '-')}") from e


def _provider(obj: dict):
    provider = make_provider(obj["provider_name"], seed=obj["seeds"].spawn(1)[0])
    logger.info("Using provider: %s", provider.name)
    return provider


def _emit(report: Report, output_path: Path | None) -> None:
    render(report, Console())
    if output_path is not None:
        output_path.write_text(to_markdown(report), encoding="utf-8")
        click.echo(f"\n📄 Report saved to: {output_path}")
