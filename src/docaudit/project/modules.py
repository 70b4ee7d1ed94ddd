"""Module discovery for multi-module repositories."""

from __future__ import annotations

from pathlib import Path

from docaudit.rule_engine.models import ModuleInfo, ProjectSnapshot, Rule

MANIFEST_FILES = (
    "Cargo.toml",
    "package.json",
    "pyproject.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
)

MODULE_CONTAINERS = ("modules", "packages", "crates")

SKIP_ROOT_DIRS = frozenset(
    {"docs", "doc", "target", "node_modules", "build", "dist", *MODULE_CONTAINERS}
)


def _has_manifest(d: Path) -> bool:
    return any((d / name).is_file() for name in MANIFEST_FILES)


def discover_modules(snapshot: ProjectSnapshot) -> list[ModuleInfo]:
    """Find module directories one level below the root and below container dirs."""
    root = snapshot.root
    found: list[ModuleInfo] = []

    for container in MODULE_CONTAINERS:
        cdir = root / container
        if not cdir.is_dir():
            continue
        for entry in cdir.iterdir():
            if entry.is_dir() and _has_manifest(entry):
                found.append(ModuleInfo(path=f"{container}/{entry.name}", name=entry.name))

    if root.is_dir():
        for entry in root.iterdir():
            if entry.name.startswith(".") or entry.name in SKIP_ROOT_DIRS:
                continue
            if entry.is_dir() and _has_manifest(entry):
                found.append(ModuleInfo(path=entry.name, name=entry.name))

    found.sort(key=lambda m: m.path)
    return found


def select_modules(rule: Rule, snapshot: ProjectSnapshot) -> list[ModuleInfo]:
    """Discovered modules narrowed by the scan's and the rule's module filters."""
    modules = discover_modules(snapshot)
    for names in (snapshot.module_filter, rule.module_filter):
        if names:
            modules = [m for m in modules if m.name in names]
    return modules
