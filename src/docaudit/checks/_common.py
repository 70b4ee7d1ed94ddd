"""Shared helpers for builtin checks."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from docaudit.project.modules import select_modules
from docaudit.rule_engine.models import (
    CheckResult,
    Failed,
    Passed,
    ProjectSnapshot,
    Rule,
    Skipped,
    Violation,
)

Handler = Callable[[Rule, ProjectSnapshot], CheckResult]


class Findings:
    """Collects the violations of one rule and turns them into a result."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule
        self.violations: list[Violation] = []

    def add(
        self,
        path: str | None,
        message: str,
        *,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        self.violations.append(
            Violation(
                rule_id=self.rule.id,
                path=path,
                message=message,
                severity=self.rule.severity,
                expected=expected,
                actual=actual,
                fix_hint=self.rule.hint(),
            )
        )

    def result(self) -> CheckResult:
        if self.violations:
            return Failed(violations=list(self.violations))
        return Passed()


def plural(items: Sequence[object]) -> str:
    return "s" if len(items) > 1 else ""


def missing_labels(content: str, required: Sequence[tuple[str, re.Pattern[str]]]) -> list[str]:
    """Labels of ``required`` whose pattern does not occur in ``content``."""
    return [label for label, pattern in required if not pattern.search(content)]


@dataclass(frozen=True)
class SectionSet:
    """Required sections of one standards-based document."""

    doc_path: str
    title: str  # e.g. "Architecture document"
    module_title: str  # e.g. "architecture"
    standard: str
    sections: tuple[tuple[str, re.Pattern[str]], ...]

    def message(self, missing: list[str], module: str | None = None) -> str:
        subject = f"Module '{module}' {self.module_title}" if module else self.title
        return f"{subject} missing {self.standard} section{plural(missing)}: {', '.join(missing)}"


def check_document_sections(
    rule: Rule, snapshot: ProjectSnapshot, family: SectionSet
) -> CheckResult:
    """Project-level section presence; Skip when the document is absent."""
    if not snapshot.is_file(family.doc_path):
        return Skipped(reason=f"{family.doc_path} not found")
    content = snapshot.read_text(family.doc_path)
    if content is None:
        return Skipped(reason=f"Cannot read {family.doc_path}")
    findings = Findings(rule)
    missing = missing_labels(content, family.sections)
    if missing:
        findings.add(family.doc_path, family.message(missing))
    return findings.result()


def check_module_sections(
    rule: Rule, snapshot: ProjectSnapshot, family: SectionSet
) -> CheckResult:
    """Section presence at project level and in every module that has the document.

    Skips only when no copy of the document exists anywhere.
    """
    findings = Findings(rule)
    found_any = False

    candidates: list[tuple[str, str | None]] = [(family.doc_path, None)]
    for module in select_modules(rule, snapshot):
        candidates.append((f"{module.path}/{family.doc_path}", module.name))

    for rel, module_name in candidates:
        if not snapshot.is_file(rel):
            continue
        found_any = True
        content = snapshot.read_text(rel)
        if content is None:
            continue
        missing = missing_labels(content, family.sections)
        if missing:
            findings.add(rel, family.message(missing, module_name))

    if not found_any:
        return Skipped(reason=f"{family.doc_path} not found at project or module level")
    return findings.result()
