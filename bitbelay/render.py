"""Console and Markdown rendering of reports."""

from __future__ import annotations

import numpy as np
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from bitbelay.report import Module, Report, TestSection

DEFAULT_WIDTH = 80


def _module_line(module: Module) -> Text:
    line = Text("[")
    line.append(module.result.symbol, style=module.result.style)
    line.append("] ")
    line.append(module.name, style="bold")
    if module.value is not None:
        line.append(f" => {module.value}")
    return line


def _section_panel(section: TestSection, descriptions: bool) -> Panel:
    parts = []
    if descriptions:
        parts.append(Markdown(section.description))
        parts.append(Rule(style="dim"))
    for i, module in enumerate(section.modules):
        if i:
            parts.append(Text())
        parts.append(_module_line(module))
        if module.details:
            parts.append(Markdown(module.details))
    return Panel(
        Group(*parts),
        title=Text(section.title, style="bold underline"),
        border_style=section.result.style.split()[-1],
    )


def render(
    report: Report,
    console: Console | None = None,
    width: int = DEFAULT_WIDTH,
    descriptions: bool = True,
) -> None:
    """Draw *report* on *console* (stderr by default)."""
    console = console or Console(stderr=True)
    console.print(Rule(characters="#", style="bold"), width=width)
    console.print(Text(f"{report.title} Test Suite", style="bold"), justify="center", width=width)
    console.print(Text(f"Date: {report.date:%Y-%m-%d %H:%M:%S}"), justify="center", width=width)
    console.print(Rule(characters="#", style="bold"), width=width)
    console.print()
    for section in report.sections:
        console.print(_section_panel(section, descriptions), width=width)


def to_markdown(report: Report, descriptions: bool = True) -> str:
    """Render *report* as a Markdown document."""
    lines = [
        f"# {report.title} Test Suite",
        "",
        f"**Date:** {report.date:%Y-%m-%d %H:%M:%S}",
        "",
    ]
    for section in report.sections:
        lines += [f"## {section.title}", ""]
        if descriptions:
            lines += [section.description, ""]
        lines += ["| Result | Module | Value |", "|--------|--------|-------|"]
        for m in section.modules:
            lines.append(f"| {m.result.symbol} | {m.name} | {m.value or ''} |")
        lines.append("")
        for m in section.modules:
            if m.details:
                lines += [f"### {m.name}", "", m.details, ""]
    return "\n".join(lines)


# ── correlation matrix ──


def _cell_style(value: float) -> str:
    if np.isnan(value):
        return "magenta"
    value = abs(value)
    if value <= 0.05:
        return "bright_black"
    if value <= 0.25:
        return "red"
    if value <= 0.5:
        return "yellow"
    return "green"


def correlation_matrix_text(matrix: np.ndarray, cell_width: int = 2) -> Text:
    """Colour-coded grid with one block per bit pair."""
    if cell_width < 2:
        raise ValueError("cell width must be at least 2")
    text = Text()
    for i, row in enumerate(matrix):
        if i:
            text.append("\n")
        for value in row:
            text.append("█" * cell_width, style=_cell_style(value))
    return text


def render_correlation_matrix(
    matrix: np.ndarray, console: Console | None = None, cell_width: int = 2
) -> None:
    console = console or Console(stderr=True)
    console.print(correlation_matrix_text(matrix, cell_width), soft_wrap=True)
    legend = Text("Legend: ")
    for label, style in (
        ("|r| <= 0.05", "bright_black"),
        ("<= 0.25", "red"),
        ("<= 0.5", "yellow"),
        ("> 0.5", "green"),
        ("undefined", "magenta"),
    ):
        legend.append("██ ", style=style)
        legend.append(f"{label}  ")
    console.print(legend)
