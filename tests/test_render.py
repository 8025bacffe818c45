"""Tests for console and Markdown rendering."""

import io
from datetime import datetime

import numpy as np
import pytest
from rich.console import Console

from bitbelay.render import correlation_matrix_text, render, to_markdown
from bitbelay.report import Module, ModuleResult, ReportBuilder, TestSectionBuilder


@pytest.fixture
def report():
    section = (
        TestSectionBuilder()
        .title("Speed Test")
        .description("Measures **throughput**.")
        .push_module(Module(ModuleResult.PASS, "Average Speed", value="12.00 Mb/sec"))
        .push_module(Module(ModuleResult.FAIL, "Median Speed", details="* slow"))
        .build()
    )
    return (
        ReportBuilder()
        .title("Performance")
        .date(datetime(2024, 5, 6, 7, 8, 9))
        .push_section(section)
        .build()
    )


def _console():
    return Console(file=io.StringIO(), width=80, color_system=None)


class TestRender:
    def test_contains_title_and_modules(self, report):
        console = _console()
        render(report, console)
        out = console.file.getvalue()
        assert "Performance Test Suite" in out
        assert "Date: 2024-05-06 07:08:09" in out
        assert "[✓] Average Speed => 12.00 Mb/sec" in out
        assert "[X] Median Speed" in out
        assert "throughput" in out

    def test_descriptions_can_be_hidden(self, report):
        console = _console()
        render(report, console, descriptions=False)
        assert "throughput" not in console.file.getvalue()


class TestMarkdown:
    def test_structure(self, report):
        md = to_markdown(report)
        assert md.startswith("# Performance Test Suite")
        assert "## Speed Test" in md
        assert "| ✓ | Average Speed | 12.00 Mb/sec |" in md
        assert "### Median Speed" in md

    def test_without_descriptions(self, report):
        assert "throughput" not in to_markdown(report, descriptions=False)


class TestCorrelationMatrix:
    def test_cell_width(self):
        text = correlation_matrix_text(np.eye(3), cell_width=3)
        lines = text.plain.split("\n")
        assert len(lines) == 3
        assert all(len(line) == 9 for line in lines)

    def test_undefined_cells(self):
        text = correlation_matrix_text(np.full((2, 2), np.nan))
        assert {span.style for span in text.spans} == {"magenta"}

    def test_minimum_width(self):
        with pytest.raises(ValueError):
            correlation_matrix_text(np.eye(2), cell_width=1)
