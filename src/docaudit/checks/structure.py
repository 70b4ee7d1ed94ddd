"""Directory layout checks: phase numbering, docs folders, community files."""

from __future__ import annotations

import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

PHASE_NUMBER_RE = re.compile(r"^(\d+)-")
MAX_PHASE = 7

CHECKLIST_PATH = "docs/3-design/compliance/compliance_checklist.md"
CHECKBOX_RE = re.compile(r"- \[([ xX])\]")
MIN_CHECKBOXES = 10

COMMUNITY_FILES = ("CODE_OF_CONDUCT.md", "SUPPORT.md")
ISSUE_TEMPLATE_DIR = ".github/ISSUE_TEMPLATE"
PR_TEMPLATE = ".github/PULL_REQUEST_TEMPLATE.md"
TEMPLATES_DIR = "docs/templates"


def _phase_dirs(snapshot: ProjectSnapshot) -> list[tuple[int, str]] | Skipped:
    """Numbered directories directly under docs/, ordered by number."""
    docs = snapshot.root / "docs"
    if not docs.is_dir():
        return Skipped(reason="docs/ directory does not exist")
    found = []
    for entry in docs.iterdir():
        m = PHASE_NUMBER_RE.match(entry.name)
        if entry.is_dir() and m:
            found.append((int(m.group(1)), entry.name))
    return sorted(found)


def sdlc_phase_numbering(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    phases = _phase_dirs(snapshot)
    if isinstance(phases, Skipped):
        return phases
    findings = Findings(rule)
    for number, name in phases:
        if number > MAX_PHASE:
            findings.add(f"docs/{name}", f"Phase directory '{name}' has number > {MAX_PHASE}")
    return findings.result()


def sdlc_phase_order(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Phase numbers are unique, so the directories sort into one sequence."""
    phases = _phase_dirs(snapshot)
    if isinstance(phases, Skipped):
        return phases
    findings = Findings(rule)
    for (prev_number, prev_name), (number, name) in zip(phases, phases[1:]):
        if number <= prev_number:
            findings.add(
                f"docs/{name}", f"Phase '{name}' is out of order (follows '{prev_name}')"
            )
    return findings.result()


def _docs_parents(snapshot: ProjectSnapshot, dirname: str) -> set[str]:
    """Parents of every nested ``dirname`` component seen in the file list."""
    parents = set()
    for rel in snapshot.files:
        parts = rel.split("/")[:-1]
        for i, part in enumerate(parts):
            if part == dirname and i > 0:
                parents.add("/".join(parts[:i]))
    return parents


def module_docs_plural(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    for parent in sorted(_docs_parents(snapshot, "doc")):
        findings.add(
            f"{parent}/doc", f"Module '{parent}' uses doc/ (singular); should use docs/"
        )
    return findings.result()


def module_docs_exclusive(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    both = _docs_parents(snapshot, "doc") & _docs_parents(snapshot, "docs")
    for parent in sorted(both):
        findings.add(parent, f"Module '{parent}' has both doc/ and docs/")
    return findings.result()


def checklist_completeness(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_file(CHECKLIST_PATH):
        return Skipped(reason="Compliance checklist not found")
    content = snapshot.read_text(CHECKLIST_PATH)
    if content is None:
        return Skipped(reason=f"Cannot read {CHECKLIST_PATH}")
    findings = Findings(rule)
    count = len(CHECKBOX_RE.findall(content))
    if count < MIN_CHECKBOXES:
        findings.add(
            CHECKLIST_PATH,
            f"Checklist has only {count} checkboxes; expected comprehensive coverage",
            expected=f">= {MIN_CHECKBOXES}",
            actual=str(count),
        )
    return findings.result()


def open_source_community_files(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    for name in COMMUNITY_FILES:
        if not snapshot.exists(name):
            findings.add(name, f"{name} does not exist")
    return findings.result()


def open_source_github_templates(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    if not snapshot.is_dir(ISSUE_TEMPLATE_DIR):
        findings.add(ISSUE_TEMPLATE_DIR, f"{ISSUE_TEMPLATE_DIR}/ directory does not exist")
    if not snapshot.exists(PR_TEMPLATE):
        findings.add(PR_TEMPLATE, f"{PR_TEMPLATE} does not exist")
    return findings.result()


def templates_populated(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_dir(TEMPLATES_DIR):
        return Skipped(reason=f"{TEMPLATES_DIR}/ does not exist")
    findings = Findings(rule)
    if not snapshot.files_under(TEMPLATES_DIR, ".md"):
        findings.add(TEMPLATES_DIR, f"{TEMPLATES_DIR}/ exists but contains no template files")
    return findings.result()
