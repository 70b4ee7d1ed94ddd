"""Filename conventions for documents under docs/.

Lowercase and space-free names are covered by declarative rules; the checks
here need exemptions a single pattern cannot express.
"""

from __future__ import annotations

import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

ADR_PREFIX = "docs/3-design/adr/"
CONVENTION_FILES = frozenset({"README.md", "CHANGELOG.md", "CONTRIBUTING.md", "SECURITY.md"})
PHASE_PREFIX_RE = re.compile(r"^\d+-")

GUIDE_NAME_RE = re.compile(r"^[a-z_]+_[a-z]+_guide\.md$")
TESTING_NAME_RE = re.compile(r"_testing_")


def _name(rel: str) -> str:
    return rel.rsplit("/", 1)[-1]


def filename_underscores(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Document names separate words with underscores, not hyphens."""
    docs = snapshot.files_under("docs", ".md")
    if not docs:
        return Skipped(reason="No .md files in docs/")
    findings = Findings(rule)
    for rel in docs:
        name = _name(rel)
        if rel.startswith(ADR_PREFIX) or name in CONVENTION_FILES:
            continue
        stem = name.removesuffix(".md")
        if "-" in stem and not PHASE_PREFIX_RE.match(stem):
            findings.add(
                rel, f"Filename '{name}' contains hyphens; use underscores", actual=name
            )
    return findings.result()


def guide_naming(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    guides = [rel for rel in snapshot.files if "guide/" in rel and rel.endswith(".md")]
    if not guides:
        return Skipped(reason="No guide files found")
    findings = Findings(rule)
    for rel in guides:
        name = _name(rel)
        if name == "README.md":
            continue
        if not GUIDE_NAME_RE.match(name):
            findings.add(
                rel,
                f"Guide file '{name}' doesn't follow name_{{phase}}_guide.md convention",
                expected="name_{phase}_guide.md",
                actual=name,
            )
    return findings.result()


def testing_file_placement(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """``*_testing_*`` documents live under the 5-testing phase."""
    findings = Findings(rule)
    for rel in snapshot.files_under("docs"):
        name = _name(rel)
        if TESTING_NAME_RE.search(name) and "5-testing" not in rel:
            findings.add(rel, f"Testing file '{name}' found outside 5-testing/")
    return findings.result()
