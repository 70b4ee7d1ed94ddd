"""Per-module documentation and layout checks.

Every check here passes vacuously when the project has no modules.
"""

from __future__ import annotations

import re
from pathlib import Path

from docaudit.checks._common import Findings
from docaudit.project.modules import select_modules
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule

MODULE_W3H = (
    ("what", re.compile(r"(?i)#{1,3}\s+.*what")),
    ("why", re.compile(r"(?i)#{1,3}\s+.*why")),
    ("how", re.compile(r"(?i)#{1,3}\s+.*how")),
)

DEPLOYMENT_FILES = ("README.md", "prerequisites.md", "installation.md")


def _has_files(d: Path) -> bool:
    return d.is_dir() and any(p.is_file() for p in d.rglob("*"))


def module_readme_w3h(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    for module in select_modules(rule, snapshot):
        rel = f"{module.path}/docs/README.md"
        if not snapshot.is_file(rel):
            continue
        content = snapshot.read_text(rel)
        if content is None:
            continue
        missing = [kw for kw, pattern in MODULE_W3H if not pattern.search(content)]
        if missing:
            findings.add(
                rel, f"Module '{module.name}' README missing W3H sections: {', '.join(missing)}"
            )
    return findings.result()


def _require_dir_with_files(rule: Rule, snapshot: ProjectSnapshot, dirname: str) -> CheckResult:
    findings = Findings(rule)
    for module in select_modules(rule, snapshot):
        if not _has_files(snapshot.root / module.path / dirname):
            findings.add(
                f"{module.path}/{dirname}",
                f"Module '{module.name}' missing {dirname}/ directory with files",
            )
    return findings.result()


def module_examples(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _require_dir_with_files(rule, snapshot, "examples")


def module_tests(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _require_dir_with_files(rule, snapshot, "tests")


def module_toolchain_doc(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    for module in select_modules(rule, snapshot):
        rel = f"{module.path}/docs/3-design/toolchain.md"
        if not snapshot.is_file(rel):
            findings.add(rel, f"Module '{module.name}' missing docs/3-design/toolchain.md")
    return findings.result()


def module_deployment_docs(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Modules that ship a deployment folder document it completely."""
    findings = Findings(rule)
    for module in select_modules(rule, snapshot):
        deploy_dir = f"{module.path}/docs/6-deployment"
        if not snapshot.is_dir(deploy_dir):
            continue
        for name in DEPLOYMENT_FILES:
            if not snapshot.exists(f"{deploy_dir}/{name}"):
                findings.add(
                    f"{deploy_dir}/{name}",
                    f"Module '{module.name}' deployment directory missing {name}",
                )
    return findings.result()
