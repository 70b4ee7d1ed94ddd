"""End-to-end tests for scan_project."""

from __future__ import annotations

from pathlib import Path

import pytest

from docaudit.rule_engine.config import ScanConfig
from docaudit.rule_engine.index import RuleConfigError
from docaudit.rule_engine.models import Failed, Passed, ProjectKind, ProjectScope, Skipped
from docaudit.scan import ScanPathError, scan_project


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def _long_doc(n: int, *, tldr: bool = False) -> str:
    head = "**TLDR**: summary\n" if tldr else ""
    return head + "\n".join(f"line {i}" for i in range(n - (1 if tldr else 0))) + "\n"


def _entry(outcome, rule_id):
    return next(e for e in outcome.entries if e.id == rule_id)


class TestScanProject:
    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ScanPathError):
            scan_project(tmp_path / "nope")

    def test_empty_project_completes(self, tmp_path):
        outcome = scan_project(tmp_path)
        assert outcome.summary.total == len(outcome.entries) > 0
        assert outcome.summary.passed + outcome.summary.failed + outcome.summary.skipped == (
            outcome.summary.total
        )
        assert isinstance(_entry(outcome, 1).result, Failed)

    def test_entries_in_rule_id_order(self, tmp_path):
        outcome = scan_project(tmp_path, ScanConfig(max_workers=4))
        ids = [e.id for e in outcome.entries]
        assert ids == sorted(ids)

    def test_long_document_needs_tldr(self, tmp_path):
        _write(tmp_path / "docs/guide.md", _long_doc(210))
        outcome = scan_project(tmp_path, ScanConfig(checks=[15]))
        result = outcome.entries[0].result
        assert isinstance(result, Failed)
        assert "210" in result.violations[0].message

    def test_long_document_with_tldr_passes(self, tmp_path):
        _write(tmp_path / "docs/guide.md", _long_doc(210, tldr=True))
        outcome = scan_project(tmp_path, ScanConfig(checks=[15]))
        assert isinstance(outcome.entries[0].result, Passed)

    def test_short_document_with_tldr_fails(self, tmp_path):
        _write(tmp_path / "docs/note.md", _long_doc(10, tldr=True))
        outcome = scan_project(tmp_path, ScanConfig(checks=[16]))
        assert isinstance(outcome.entries[0].result, Failed)

    def test_open_source_rules_skipped_for_internal(self, tmp_path):
        outcome = scan_project(tmp_path, ScanConfig(checks=[6]))
        assert outcome.project_kind == ProjectKind.INTERNAL
        result = outcome.entries[0].result
        assert isinstance(result, Skipped)
        assert "requires open_source" in result.reason

    def test_license_detection_enables_open_source_rules(self, tmp_path):
        _write(tmp_path / "LICENSE", "MIT License\n")
        outcome = scan_project(tmp_path, ScanConfig(checks=[6, 7]))
        assert outcome.project_kind == ProjectKind.OPEN_SOURCE
        assert isinstance(outcome.entries[0].result, Passed)
        assert isinstance(outcome.entries[1].result, Failed)

    def test_scope_limits_rules(self, tmp_path):
        outcome = scan_project(
            tmp_path, ScanConfig(checks=[51], project_scope=ProjectScope.SMALL)
        )
        assert isinstance(outcome.entries[0].result, Skipped)

    def test_category_filter(self, tmp_path):
        outcome = scan_project(tmp_path, ScanConfig(categories=["navigation"]))
        assert outcome.entries
        assert {e.category for e in outcome.entries} == {"navigation"}

    def test_custom_rules_override_and_extend(self, tmp_path):
        _write(tmp_path / "README.rst", "Title\n=====\n")
        rules = _write(
            tmp_path / "rules.toml",
            """
[[rules]]
id = 1
category = "structure"
description = "Root README exists"
severity = "error"
type = "file_exists"
path = "README.rst"

[[rules]]
id = 500
category = "custom"
description = "No bad regex crashes the scan"
severity = "error"
type = "glob_content_matches"
glob = "*.rst"
pattern = "(oops"
""",
        )
        outcome = scan_project(tmp_path, ScanConfig(rules_path=rules, checks=[1, 500]))
        assert isinstance(_entry(outcome, 1).result, Passed)
        assert isinstance(_entry(outcome, 500).result, Skipped)

    def test_broken_rules_file_raises(self, tmp_path):
        rules = _write(tmp_path / "rules.toml", "[[rules]]\nid = 1\n")
        with pytest.raises(RuleConfigError):
            scan_project(tmp_path, ScanConfig(rules_path=rules))

    def test_outcome_serialises(self, tmp_path):
        outcome = scan_project(tmp_path, ScanConfig(checks=[1, 2]))
        data = outcome.model_dump(mode="json")
        assert data["summary"]["total"] == 2
        assert data["entries"][0]["result"]["status"] == "fail"
