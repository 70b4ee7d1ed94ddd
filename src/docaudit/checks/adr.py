"""Architecture decision record checks."""

from __future__ import annotations

import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

ADR_DIR = "docs/3-design/adr"
ADR_NAMING_RE = re.compile(r"^\d{3}-[a-z0-9_-]+\.md$")
ADR_PREFIX_RE = re.compile(r"^\d{3}-")
INDEX_NAMES = ("README.md", "index.md")


def _adr_files(snapshot: ProjectSnapshot) -> list[str]:
    return snapshot.files_under(ADR_DIR, ".md", recursive=False)


def _name(rel: str) -> str:
    return rel.rsplit("/", 1)[-1]


def adr_naming(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_dir(ADR_DIR):
        return Skipped(reason="ADR directory does not exist")
    files = _adr_files(snapshot)
    if not files:
        return Skipped(reason="No ADR files found")
    findings = Findings(rule)
    for rel in files:
        name = _name(rel)
        if name in INDEX_NAMES:
            continue
        if not ADR_NAMING_RE.match(name):
            findings.add(
                rel,
                f"ADR file '{name}' doesn't follow NNN-title.md naming convention",
                expected="NNN-title.md",
                actual=name,
            )
    return findings.result()


def adr_index_completeness(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Every numbered ADR is referenced from the ADR index."""
    if not snapshot.is_dir(ADR_DIR):
        return Skipped(reason="ADR directory does not exist")
    index = next(
        (f"{ADR_DIR}/{name}" for name in INDEX_NAMES if snapshot.is_file(f"{ADR_DIR}/{name}")),
        None,
    )
    if index is None:
        return Skipped(reason="No ADR index file found")
    content = snapshot.read_text(index)
    if content is None:
        return Skipped(reason=f"Cannot read {index}")
    findings = Findings(rule)
    for rel in _adr_files(snapshot):
        name = _name(rel)
        if not ADR_PREFIX_RE.match(name):
            continue
        if name not in content and name.removesuffix(".md") not in content:
            findings.add(index, f"ADR '{name}' not referenced in index", expected=name)
    return findings.result()
