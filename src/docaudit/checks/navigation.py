"""Navigation checks: the docs hub, phase links and link resolution."""

from __future__ import annotations

import posixpath
import re

from docaudit.checks._common import Findings
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped

HUB_PATH = "docs/README.md"
W3H_KEYWORDS = ("who", "what", "why", "how")
# Audience ("who") is only required of the hub itself.
EXTENDED_HUBS = ("docs/3-design/architecture.md", "docs/4-development/developer_guide.md")
EXTENDED_KEYWORDS = ("what", "why", "how")
PHASE_DIR_RE = re.compile(r"^(\d+-[a-z_]+)$")
DEEP_LINK_RE = re.compile(r"\]\(docs/\d+-[^)]+\)")
LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")

_EXTERNAL_PREFIXES = ("http://", "https://", "#", "mailto:")


def w3h_heading_re(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"(?i)#{{1,3}}\s+.*{keyword}")


_W3H_HEADINGS = {kw: w3h_heading_re(kw) for kw in W3H_KEYWORDS}


def _read_hub(snapshot: ProjectSnapshot) -> str | Skipped:
    if not snapshot.is_file(HUB_PATH):
        return Skipped(reason=f"{HUB_PATH} not found")
    content = snapshot.read_text(HUB_PATH)
    if content is None:
        return Skipped(reason=f"Cannot read {HUB_PATH}")
    return content


def w3h_hub(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """The docs hub answers who, what, why and how."""
    content = _read_hub(snapshot)
    if isinstance(content, Skipped):
        return content
    lowered = content.lower()
    missing = [
        kw
        for kw in W3H_KEYWORDS
        if not _W3H_HEADINGS[kw].search(content) and f"**{kw}**" not in lowered
    ]
    findings = Findings(rule)
    if missing:
        findings.add(HUB_PATH, f"Hub document missing W3H sections: {', '.join(missing)}")
    return findings.result()


def hub_links_phases(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Every numbered phase directory under docs/ is mentioned by the hub."""
    content = _read_hub(snapshot)
    if isinstance(content, Skipped):
        return content
    docs = snapshot.root / "docs"
    phases = sorted(
        entry.name
        for entry in docs.iterdir()
        if entry.is_dir() and PHASE_DIR_RE.match(entry.name)
    )
    findings = Findings(rule)
    for phase in phases:
        if phase not in content:
            findings.add(HUB_PATH, f"Hub does not link to phase directory '{phase}'")
    return findings.result()


def no_deep_links(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """The root README links to the hub, not into phase directories."""
    if not snapshot.is_file("README.md"):
        return Skipped(reason="README.md not found")
    content = snapshot.read_text("README.md")
    if content is None:
        return Skipped(reason="Cannot read README.md")
    findings = Findings(rule)
    for lineno, line in enumerate(content.splitlines(), start=1):
        if DEEP_LINK_RE.search(line):
            findings.add(
                "README.md", f"Line {lineno}: Root README deep-links into docs/ subdirectory"
            )
    return findings.result()


def _resolve(source: str, target: str) -> str:
    if target.startswith("/"):
        return posixpath.normpath(target.lstrip("/"))
    return posixpath.normpath(posixpath.join(posixpath.dirname(source), target))


def link_resolution(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Markdown links between documents point at files that exist."""
    docs = snapshot.files_under("docs", ".md")
    if not docs:
        return Skipped(reason="No .md files in docs/")
    findings = Findings(rule)
    for rel in docs:
        content = snapshot.read_text(rel)
        if content is None:
            continue
        for m in LINK_RE.finditer(content):
            target = m.group(2).strip()
            if target.startswith(_EXTERNAL_PREFIXES):
                continue
            target_path = target.split("#", 1)[0]
            if not target_path.endswith(".md"):
                continue
            if not snapshot.exists(_resolve(rel, target_path)):
                findings.add(rel, f"Broken link: '{target}' does not exist", actual=target)
    return findings.result()


def w3h_extended(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Architecture and developer guide explain what, why and how.

    Documents that do not exist are not checked.
    """
    findings = Findings(rule)
    for rel in EXTENDED_HUBS:
        if not snapshot.is_file(rel):
            continue
        content = snapshot.read_text(rel)
        if content is None:
            continue
        missing = [kw for kw in EXTENDED_KEYWORDS if not _W3H_HEADINGS[kw].search(content)]
        if missing:
            findings.add(rel, f"Hub document '{rel}' missing W3H sections: {', '.join(missing)}")
    return findings.result()
