"""Tests for the CLI."""

from click.testing import CliRunner

from bitbelay import __version__
from bitbelay.cli import main
from bitbelay.hashers import ConstantHasher


def _invoke(*args, **kwargs):
    return CliRunner().invoke(main, list(args), **kwargs)


class TestCLI:
    def test_version(self):
        r = _invoke("--version")
        assert r.exit_code == 0
        assert __version__ in r.output

    def test_list(self):
        r = _invoke("list")
        assert r.exit_code == 0
        assert "blake2b" in r.output
        assert "ASCII Alphanumeric (64 characters)" in r.output

    def test_avalanche(self):
        r = _invoke("--hasher", "blake2b", "--seed", "1", "avalanche", "-e", "2", "-i", "50",
                    "-m", "0.5")
        assert r.exit_code == 0, r.output
        assert "Avalanching Test Suite" in r.output
        assert "Strict Avalanche Criterion" in r.output

    def test_chi_squared(self):
        r = _invoke("--seed", "2", "--provider", "u64-short", "chi-squared", "-b", "4",
                    "-i", "100")
        assert r.exit_code == 0, r.output
        assert "Chi Squared Test Suite" in r.output
        assert "Failure to Reject the Null Hypothesis" in r.output

    def test_correlation_matrix(self):
        r = _invoke("--seed", "3", "correlation", "-i", "200", "--correlation-matrix")
        assert r.exit_code == 0, r.output
        assert "Legend" in r.output
        assert "Bitwise Pearson Correlation" in r.output

    def test_performance(self):
        r = _invoke("performance", "-s", "1 kB", "-i", "3", "-t", "0")
        assert r.exit_code == 0, r.output
        assert "Average Speed" in r.output
        assert "Median Speed" in r.output

    def test_invalid_max_deviance(self):
        r = _invoke("avalanche", "-e", "1", "-i", "1", "-m", "2.0")
        assert r.exit_code == 2
        assert "max_deviance" in r.output

    def test_invalid_data_size(self):
        r = _invoke("performance", "-s", "lots")
        assert r.exit_code == 2

    def test_markdown_output(self, tmp_path):
        path = tmp_path / "report.md"
        r = _invoke("--seed", "4", "chi-squared", "-b", "2", "-i", "20", "--output", str(path))
        assert r.exit_code == 0, r.output
        assert path.read_text(encoding="utf-8").startswith("# Chi Squared Test Suite")

    def test_custom_hasher(self):
        r = _invoke("avalanche", "-e", "1", "-i", "10", obj={"build_hasher": ConstantHasher()})
        assert r.exit_code == 0, r.output
        assert "At least one bit" in r.output
