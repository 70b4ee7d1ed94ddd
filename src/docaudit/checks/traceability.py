"""Cross-phase traceability between SDLC documents."""

from __future__ import annotations

import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

DESIGN_DIR = "docs/3-design"
PLANNING_DIR = "docs/2-planning"
BACKLOG_PATH = "docs/2-planning/backlog.md"

DESIGN_REQ_RE = re.compile(r"(?i)requirements\.md|FR-\d|STK-\d|SRS|1-requirements")
PLAN_ARCH_RE = re.compile(r"(?i)architecture\.md|3-design|architectural")
BACKLOG_REQ_RE = re.compile(
    r"(?i)requirements\.md|requirements\b|FR-\d|STK-\d|SRS|1-requirements|BL-\d"
)

# Phase directory -> filename fragments one of its direct children must contain.
PHASE_ARTIFACTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("docs/1-requirements", ("requirements", "srs")),
    ("docs/2-planning", ("plan", "implementation")),
    ("docs/3-design", ("architecture.md",)),
)


def phase_artifact_presence(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Each existing phase directory holds its primary artifact."""
    phases = [(d, expected) for d, expected in PHASE_ARTIFACTS if snapshot.is_dir(d)]
    if not phases:
        return Skipped(reason="No SDLC phase directories exist")
    findings = Findings(rule)
    for phase_dir, expected in phases:
        names = [entry.name.lower() for entry in (snapshot.root / phase_dir).iterdir()]
        if not any(fragment in name for name in names for fragment in expected):
            wanted = "' or '".join(expected)
            findings.add(
                phase_dir,
                f"Phase directory '{phase_dir}' exists but is missing expected artifact "
                f"containing '{wanted}'",
            )
    return findings.result()


def _qualifying(
    snapshot: ProjectSnapshot, directory: str, excluded_prefixes: tuple[str, ...] = ()
) -> list[str]:
    readme = f"{directory}/README.md"
    return [
        rel
        for rel in snapshot.files_under(directory, ".md")
        if rel != readme and not rel.startswith(excluded_prefixes)
    ]


def _trace_directory(
    rule: Rule,
    snapshot: ProjectSnapshot,
    directory: str,
    pattern: re.Pattern[str],
    message: str,
    excluded_prefixes: tuple[str, ...] = (),
) -> CheckResult:
    if not snapshot.is_dir(directory):
        return Skipped(reason=f"{directory}/ does not exist")
    files = _qualifying(snapshot, directory, excluded_prefixes)
    if not files:
        return Skipped(reason=f"No qualifying .md files in {directory}/")
    findings = Findings(rule)
    for rel in files:
        content = snapshot.read_text(rel)
        if content is None:
            continue
        if not pattern.search(content):
            findings.add(rel, message.format(path=rel), expected=pattern.pattern)
    return findings.result()


def design_traces_requirements(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _trace_directory(
        rule,
        snapshot,
        DESIGN_DIR,
        DESIGN_REQ_RE,
        "Design document '{path}' does not reference requirements "
        "(expected pattern: requirements.md, FR-N, STK-N, SRS, or 1-requirements)",
        excluded_prefixes=(f"{DESIGN_DIR}/adr/", f"{DESIGN_DIR}/compliance/"),
    )


def plan_traces_design(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _trace_directory(
        rule,
        snapshot,
        PLANNING_DIR,
        PLAN_ARCH_RE,
        "Planning document '{path}' does not reference architecture "
        "(expected pattern: architecture.md, 3-design, or architectural)",
    )


def backlog_traces_requirements(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_file(BACKLOG_PATH):
        return Skipped(reason=f"{BACKLOG_PATH} does not exist")
    content = snapshot.read_text(BACKLOG_PATH)
    if content is None:
        return Skipped(reason=f"Cannot read {BACKLOG_PATH}")
    findings = Findings(rule)
    if not BACKLOG_REQ_RE.search(content):
        findings.add(
            BACKLOG_PATH,
            "Backlog does not reference requirements "
            "(expected: requirements.md, FR-N, STK-N, SRS, 1-requirements, or BL-N)",
        )
    return findings.result()
