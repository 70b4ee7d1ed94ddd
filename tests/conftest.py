"""Shared fixtures for docaudit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from docaudit.project.snapshot import build_snapshot
from docaudit.rule_engine.models import (
    Builtin,
    ProjectKind,
    ProjectScope,
    ProjectSnapshot,
    Rule,
    Severity,
)


@pytest.fixture
def make_rule():
    """Build a Rule around a shape, defaulting the descriptive fields."""

    def _make(shape=None, *, handler: str | None = None, **overrides) -> Rule:
        if shape is None:
            shape = Builtin(handler=handler or "noop")
        data = {
            "id": 1,
            "category": "test",
            "description": "test rule",
            "severity": Severity.WARNING,
            "shape": shape,
        }
        data.update(overrides)
        return Rule(**data)

    return _make


@pytest.fixture
def snap():
    """Snapshot a project directory for a check under test."""

    def _snap(
        root: Path,
        *,
        kind: ProjectKind = ProjectKind.INTERNAL,
        scope: ProjectScope = ProjectScope.LARGE,
        modules: list[str] | None = None,
    ) -> ProjectSnapshot:
        return build_snapshot(root, project_kind=kind, project_scope=scope, module_filter=modules)

    return _snap
