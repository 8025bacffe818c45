"""Structured results produced by the analyses and suites.

A :class:`Report` holds one :class:`TestSection` per completed test; each
section holds one or more :class:`Module` verdicts. Everything here is an
immutable value. Builders enforce required fields and reject duplicates.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime

from bitbelay.builder import FieldBuilder


class ModuleResult(enum.Enum):
    """Verdict of a single module."""

    PASS = "pass"
    INCONCLUSIVE = "inconclusive"
    FAIL = "fail"

    @property
    def symbol(self) -> str:
        return {"pass": "✓", "inconclusive": "?", "fail": "X"}[self.value]

    @property
    def style(self) -> str:
        return {"pass": "bold green", "inconclusive": "bold yellow", "fail": "bold red"}[self.value]

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class Module:
    """Smallest pass/inconclusive/fail unit inside a test section."""

    result: ModuleResult
    name: str
    value: str | None = None
    details: str | None = None


@dataclass(frozen=True)
class TestSection:
    """Title, long-form description and ordered modules for one test."""

    __test__ = False  # not a pytest class

    title: str
    description: str
    modules: tuple[Module, ...]

    @property
    def result(self) -> ModuleResult:
        """Worst verdict across the section's modules."""
        results = {m.result for m in self.modules}
        for verdict in (ModuleResult.FAIL, ModuleResult.INCONCLUSIVE):
            if verdict in results:
                return verdict
        return ModuleResult.PASS


@dataclass(frozen=True)
class Report:
    title: str
    date: datetime
    sections: tuple[TestSection, ...]

    @property
    def passed(self) -> bool:
        return all(s.result is ModuleResult.PASS for s in self.sections)


# ── builders ──


class ModuleBuilder(FieldBuilder):
    def result(self, result: ModuleResult) -> ModuleBuilder:
        return self._set("result", result)

    def name(self, name: str) -> ModuleBuilder:
        return self._set("name", name)

    def value(self, value: str) -> ModuleBuilder:
        return self._set("value", value)

    def details(self, details: str) -> ModuleBuilder:
        return self._set("details", details)

    def build(self) -> Module:
        return Module(
            result=self._require("result"),
            name=self._require("name"),
            value=self._optional("value"),
            details=self._optional("details"),
        )


class TestSectionBuilder(FieldBuilder):
    __test__ = False

    def title(self, title: str) -> TestSectionBuilder:
        return self._set("title", title)

    def description(self, description: str) -> TestSectionBuilder:
        return self._set("description", description)

    def push_module(self, module: Module) -> TestSectionBuilder:
        return self._push("modules", module)

    def build(self) -> TestSection:
        return TestSection(
            title=self._require("title"),
            description=self._require("description"),
            modules=self._require_list("modules"),
        )


class ReportBuilder(FieldBuilder):
    def title(self, title: str) -> ReportBuilder:
        return self._set("title", title)

    def date(self, date: datetime) -> ReportBuilder:
        return self._set("date", date)

    def push_section(self, section: TestSection) -> ReportBuilder:
        return self._push("sections", section)

    def build(self) -> Report:
        return Report(
            title=self._require("title"),
            date=self._optional("date") or datetime.now(),
            sections=self._require_list("sections"),
        )
