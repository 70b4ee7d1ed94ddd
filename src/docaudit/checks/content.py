"""Content heuristics: summaries, glossary hygiene, README length, absolute paths."""

from __future__ import annotations

import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

TLDR_RE = re.compile(r"(?i)\*\*TLDR\*\*|## TLDR|## TL;DR")
TLDR_LINE_THRESHOLD = 200

GLOSSARY_PATH = "docs/glossary.md"
GLOSSARY_TERM_RE = re.compile(r"^\*\*[^*]+\*\*")
GLOSSARY_VALID_RE = re.compile(r"^\*\*[^*]+\*\*\s*[-—–:]\s+\S")
GLOSSARY_CAPTURE_RE = re.compile(r"^\*\*([^*]+)\*\*")
TERM_DEF_RE = re.compile(r"^\*\*([^*]+)\*\*\s*[-—–:]\s*(.*)")
ACRONYM_RE = re.compile(r"^[A-Z]{2,}$")

README_MAX_LINES = 100

HARDCODED_PATH_RE = re.compile(
    r"(/mnt/|/home/|/Users/|/tmp/|/var/|/opt/|/etc/)\S+|[A-Za-z]:\\[^\s]+"
)


def _docs_markdown(snapshot: ProjectSnapshot) -> list[str]:
    return snapshot.files_under("docs", ".md")


def _line_count(content: str) -> int:
    return len(content.splitlines())


def tldr_required(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Long documents must open with a TLDR."""
    findings = Findings(rule)
    for rel in _docs_markdown(snapshot):
        content = snapshot.read_text(rel)
        if content is None:
            continue
        lines = _line_count(content)
        if lines >= TLDR_LINE_THRESHOLD and not TLDR_RE.search(content):
            findings.add(rel, f"File has {lines} lines but no TLDR section")
    return findings.result()


def tldr_unneeded(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Short documents should not carry a TLDR."""
    findings = Findings(rule)
    for rel in _docs_markdown(snapshot):
        content = snapshot.read_text(rel)
        if content is None:
            continue
        lines = _line_count(content)
        if lines < TLDR_LINE_THRESHOLD and TLDR_RE.search(content):
            findings.add(rel, f"File has only {lines} lines but has a TLDR section (unnecessary)")
    return findings.result()


def _glossary(snapshot: ProjectSnapshot) -> str | Skipped:
    if not snapshot.is_file(GLOSSARY_PATH):
        return Skipped(reason=f"{GLOSSARY_PATH} not found")
    content = snapshot.read_text(GLOSSARY_PATH)
    if content is None:
        return Skipped(reason=f"Cannot read {GLOSSARY_PATH}")
    return content


def glossary_format(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    content = _glossary(snapshot)
    if isinstance(content, Skipped):
        return content
    findings = Findings(rule)
    for lineno, line in enumerate(content.splitlines(), start=1):
        entry = line.strip()
        if GLOSSARY_TERM_RE.match(entry) and not GLOSSARY_VALID_RE.match(entry):
            findings.add(
                GLOSSARY_PATH,
                f"Line {lineno}: Term definition doesn't follow '**Term** - Definition' format",
                expected="**Term** - Definition",
                actual=entry,
            )
    return findings.result()


def glossary_alphabetized(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    content = _glossary(snapshot)
    if isinstance(content, Skipped):
        return content
    matches = (GLOSSARY_CAPTURE_RE.match(line.strip()) for line in content.splitlines())
    terms = [m.group(1).strip().lower() for m in matches if m]
    findings = Findings(rule)
    for prev, cur in zip(terms, terms[1:]):
        if cur < prev:
            findings.add(GLOSSARY_PATH, f"Term '{cur}' should come before '{prev}'")
    return findings.result()


def glossary_acronyms(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    content = _glossary(snapshot)
    if isinstance(content, Skipped):
        return content
    findings = Findings(rule)
    for lineno, line in enumerate(content.splitlines(), start=1):
        m = TERM_DEF_RE.match(line.strip())
        if not m:
            continue
        term, definition = m.group(1).strip(), m.group(2)
        if not ACRONYM_RE.match(term):
            continue
        expanded = any(any(c.islower() for c in word) for word in definition.split())
        if not expanded:
            findings.add(
                GLOSSARY_PATH, f"Line {lineno}: Acronym '{term}' lacks expansion in definition"
            )
    return findings.result()


def readme_line_count(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_file("README.md"):
        return Skipped(reason="README.md not found")
    content = snapshot.read_text("README.md")
    if content is None:
        return Skipped(reason="Cannot read README.md")
    findings = Findings(rule)
    lines = _line_count(content)
    if lines > README_MAX_LINES:
        findings.add(
            "README.md",
            f"README.md has {lines} lines; should be under {README_MAX_LINES} lines",
            expected=f"<= {README_MAX_LINES}",
            actual=str(lines),
        )
    return findings.result()


def _inside_url(line: str, start: int) -> bool:
    scheme = line.rfind("://", 0, start)
    if scheme < 0:
        return False
    between = line[scheme + 3 : start]
    return not any(c.isspace() for c in between)


def hardcoded_paths(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Absolute machine-specific paths in prose, ignoring code fences and URLs."""
    docs = _docs_markdown(snapshot)
    if not docs:
        return Skipped(reason="No .md files in docs/")
    findings = Findings(rule)
    for rel in docs:
        content = snapshot.read_text(rel)
        if content is None:
            continue
        in_fence = False
        for lineno, line in enumerate(content.splitlines(), start=1):
            if line.lstrip().startswith("```"):
                in_fence = not in_fence
                continue
            if in_fence:
                continue
            for m in HARDCODED_PATH_RE.finditer(line):
                if _inside_url(line, m.start()):
                    continue
                findings.add(rel, f"Line {lineno}: hardcoded absolute path '{m.group(0)}'")
                break
    return findings.result()
