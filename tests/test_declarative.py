"""Tests for the declarative rule interpreter."""

from __future__ import annotations

from pathlib import Path

from docaudit.rule_engine.declarative import _EVALUATORS, evaluate, lookup_key
from docaudit.rule_engine.models import (
    SHAPE_TYPES,
    Builtin,
    DirExists,
    DirNotExists,
    Failed,
    FileContentMatches,
    FileContentNotMatches,
    FileExists,
    GlobContentMatches,
    GlobContentNotMatches,
    GlobNamingMatches,
    GlobNamingNotMatches,
    ManifestKeyExists,
    ManifestKeyMatches,
    Passed,
    Skipped,
)


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_every_shape_has_an_evaluator():
    assert set(_EVALUATORS) == set(SHAPE_TYPES)


class TestExistence:
    def test_file_exists_pass(self, tmp_path, make_rule, snap):
        _write(tmp_path / "README.md", "# x")
        result = evaluate(make_rule(FileExists(path="README.md")), snap(tmp_path))
        assert isinstance(result, Passed)

    def test_file_exists_fail_references_path(self, tmp_path, make_rule, snap):
        result = evaluate(make_rule(FileExists(path="README.md")), snap(tmp_path))
        assert isinstance(result, Failed)
        assert len(result.violations) == 1
        assert result.violations[0].path == "README.md"
        assert result.violations[0].message == "File 'README.md' does not exist"

    def test_file_exists_fails_on_directory(self, tmp_path, make_rule, snap):
        (tmp_path / "README.md").mkdir()
        result = evaluate(make_rule(FileExists(path="README.md")), snap(tmp_path))
        assert isinstance(result, Failed)

    def test_dir_exists_fails_on_file(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs", "not a dir")
        result = evaluate(make_rule(DirExists(path="docs")), snap(tmp_path))
        assert isinstance(result, Failed)
        assert result.violations[0].message == "Directory 'docs' does not exist"

    def test_dir_not_exists_uses_custom_message(self, tmp_path, make_rule, snap):
        (tmp_path / "doc").mkdir()
        rule = make_rule(DirNotExists(path="doc", message="Use docs/ instead"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert result.violations[0].message == "Use docs/ instead"

    def test_dir_not_exists_pass_when_absent(self, tmp_path, make_rule, snap):
        rule = make_rule(DirNotExists(path="doc", message="m"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_violation_carries_rule_metadata(self, tmp_path, make_rule, snap):
        rule = make_rule(FileExists(path="LICENSE"), id=7, severity="error")
        result = evaluate(rule, snap(tmp_path))
        violation = result.violations[0]
        assert violation.rule_id == 7
        assert violation.severity == "error"
        assert violation.fix_hint == "Create the file 'LICENSE'"


class TestFileContent:
    def test_matches_pass(self, tmp_path, make_rule, snap):
        _write(tmp_path / "README.md", "# Title\n")
        rule = make_rule(FileContentMatches(path="README.md", pattern=r"^# \w+"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_matches_fail(self, tmp_path, make_rule, snap):
        _write(tmp_path / "README.md", "no title")
        rule = make_rule(FileContentMatches(path="README.md", pattern=r"^# "))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert "does not match pattern" in result.violations[0].message

    def test_matches_missing_file_skips(self, tmp_path, make_rule, snap):
        rule = make_rule(FileContentMatches(path="README.md", pattern="x"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Skipped)
        assert "does not exist" in result.reason

    def test_bad_regex_skips(self, tmp_path, make_rule, snap):
        _write(tmp_path / "README.md", "x")
        rule = make_rule(FileContentMatches(path="README.md", pattern="(unclosed"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Skipped)
        assert "(unclosed" in result.reason

    def test_unreadable_file_skips(self, tmp_path, make_rule, snap):
        (tmp_path / "README.md").write_bytes(b"\xff\xfe\x00bad")
        rule = make_rule(FileContentMatches(path="README.md", pattern="x"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Skipped)

    def test_not_matches_missing_file_passes(self, tmp_path, make_rule, snap):
        rule = make_rule(FileContentNotMatches(path="README.md", pattern="x"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_not_matches_fail(self, tmp_path, make_rule, snap):
        _write(tmp_path / "README.md", "Lorem ipsum dolor")
        rule = make_rule(FileContentNotMatches(path="README.md", pattern="(?i)lorem"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert "forbidden pattern" in result.violations[0].message


class TestGlobContent:
    def test_zero_matches_is_vacuous_pass(self, tmp_path, make_rule, snap):
        (tmp_path / "docs").mkdir()
        rule = make_rule(GlobContentMatches(glob="docs/*.md", pattern="x"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_one_violation_per_nonmatching_file(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/a.md", "# A")
        _write(tmp_path / "docs/b.md", "no heading")
        _write(tmp_path / "docs/c.md", "also none")
        rule = make_rule(GlobContentMatches(glob="docs/*.md", pattern="(?m)^# "))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert [v.path for v in result.violations] == ["docs/b.md", "docs/c.md"]

    def test_invalid_pattern_skips(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/a.md", "x")
        rule = make_rule(GlobContentMatches(glob="docs/*.md", pattern="[z-a]"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Skipped)

    def test_not_matches_one_violation_per_file(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/a.md", "TBD one\nTBD two\nTBD three")
        rule = make_rule(GlobContentNotMatches(glob="docs/*.md", pattern="TBD"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert len(result.violations) == 1
        assert result.violations[0].actual == "TBD one"

    def test_not_matches_exclude_pattern_exempts_line(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/a.md", "| TBD | in a table |\nclean line")
        rule = make_rule(
            GlobContentNotMatches(glob="docs/*.md", pattern="TBD", exclude_pattern=r"^\|")
        )
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)


class TestGlobNaming:
    def test_matches_uses_base_name(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/Sub/good_name.md")
        rule = make_rule(GlobNamingMatches(glob="docs/**/*.md", pattern=r"^[a-z_]+\.md$"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_matches_fail_reports_name(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/Bad-Name.md")
        rule = make_rule(GlobNamingMatches(glob="docs/*.md", pattern=r"^[a-z_]+\.md$"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert result.violations[0].actual == "Bad-Name.md"
        assert "Filename 'Bad-Name.md' does not match" in result.violations[0].message

    def test_not_matches_exclude_paths(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/adr/ADR.md")
        _write(tmp_path / "docs/Upper.md")
        rule = make_rule(
            GlobNamingNotMatches(glob="docs/**/*.md", pattern="[A-Z]", exclude_paths=["docs/adr/"])
        )
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert [v.path for v in result.violations] == ["docs/Upper.md"]
        assert result.violations[0].message == "Filename 'Upper.md' matches forbidden pattern '[A-Z]'"

    def test_not_matches_custom_message(self, tmp_path, make_rule, snap):
        _write(tmp_path / "docs/Upper.md")
        rule = make_rule(
            GlobNamingNotMatches(glob="docs/*.md", pattern="[A-Z]", message="lowercase please")
        )
        result = evaluate(rule, snap(tmp_path))
        assert result.violations[0].message == "lowercase please"


class TestManifest:
    def test_skip_without_manifest(self, tmp_path, make_rule, snap):
        result = evaluate(make_rule(ManifestKeyExists(key="project.name")), snap(tmp_path))
        assert isinstance(result, Skipped)

    def test_key_exists(self, tmp_path, make_rule, snap):
        _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
        assert isinstance(
            evaluate(make_rule(ManifestKeyExists(key="project.name")), snap(tmp_path)), Passed
        )
        result = evaluate(make_rule(ManifestKeyExists(key="project.license")), snap(tmp_path))
        assert isinstance(result, Failed)
        assert result.violations[0].message == "Key 'project.license' not found in pyproject.toml"
        assert result.violations[0].path == "pyproject.toml"

    def test_key_matches_stringifies(self, tmp_path, make_rule, snap):
        _write(tmp_path / "package.json", '{"name": "demo", "private": true}')
        rule = make_rule(ManifestKeyMatches(key="private", pattern="^true$"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Passed)

    def test_key_matches_fail(self, tmp_path, make_rule, snap):
        _write(tmp_path / "Cargo.toml", '[package]\nname = "Demo"\n')
        rule = make_rule(ManifestKeyMatches(key="package.name", pattern="^[a-z]+$"))
        result = evaluate(rule, snap(tmp_path))
        assert isinstance(result, Failed)
        assert result.violations[0].actual == "Demo"

    def test_key_matches_missing_key_skips(self, tmp_path, make_rule, snap):
        _write(tmp_path / "Cargo.toml", '[package]\nname = "demo"\n')
        rule = make_rule(ManifestKeyMatches(key="package.edition", pattern="2021"))
        assert isinstance(evaluate(rule, snap(tmp_path)), Skipped)

    def test_lookup_key_through_non_mapping(self):
        from docaudit.rule_engine.declarative import _MISSING

        assert lookup_key({"a": {"b": 1}}, "a.b") == 1
        assert lookup_key({"a": 1}, "a.b") is _MISSING


def test_builtin_shape_is_not_evaluated_declaratively(tmp_path, make_rule, snap):
    assert isinstance(evaluate(make_rule(Builtin(handler="x")), snap(tmp_path)), Skipped)
