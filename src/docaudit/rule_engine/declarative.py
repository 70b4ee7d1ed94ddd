"""Interpreter for declarative rule shapes."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from typing import Any

from docaudit.rule_engine.globs import compile_glob
from docaudit.rule_engine.models import (
    Builtin,
    CheckResult,
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
    ProjectSnapshot,
    Rule,
    Skipped,
    Violation,
)


class InvalidPattern(Exception):
    """A rule carries a regex or glob that cannot be compiled."""


def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPattern(f"Invalid regex '{pattern}': {e}") from e


def _glob(glob: str) -> re.Pattern[str]:
    compiled = compile_glob(glob)
    if compiled is None:
        raise InvalidPattern(f"Invalid glob pattern '{glob}'")
    return compiled


def _violation(
    rule: Rule,
    path: str | None,
    message: str,
    *,
    expected: str | None = None,
    actual: str | None = None,
) -> Violation:
    return Violation(
        rule_id=rule.id,
        path=path,
        message=message,
        severity=rule.severity,
        expected=expected,
        actual=actual,
        fix_hint=rule.hint(),
    )


def _result(violations: list[Violation]) -> CheckResult:
    return Failed(violations=violations) if violations else Passed()


def _matching_files(snapshot: ProjectSnapshot, glob: str) -> list[str]:
    compiled = _glob(glob)
    return [rel for rel in snapshot.files if compiled.match(rel)]


def _basename(rel: str) -> str:
    return rel.rsplit("/", 1)[-1]


# --- Existence ---


def _file_exists(rule: Rule, shape: FileExists, snapshot: ProjectSnapshot) -> CheckResult:
    if snapshot.is_file(shape.path):
        return Passed()
    return Failed(violations=[_violation(rule, shape.path, f"File '{shape.path}' does not exist")])


def _dir_exists(rule: Rule, shape: DirExists, snapshot: ProjectSnapshot) -> CheckResult:
    if snapshot.is_dir(shape.path):
        return Passed()
    return Failed(
        violations=[_violation(rule, shape.path, f"Directory '{shape.path}' does not exist")]
    )


def _dir_not_exists(rule: Rule, shape: DirNotExists, snapshot: ProjectSnapshot) -> CheckResult:
    if not snapshot.is_dir(shape.path):
        return Passed()
    return Failed(violations=[_violation(rule, shape.path, shape.message)])


# --- Single-file content ---


def _file_content_matches(
    rule: Rule, shape: FileContentMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    if not snapshot.is_file(shape.path):
        return Skipped(reason=f"File '{shape.path}' does not exist")
    content = snapshot.read_text(shape.path)
    if content is None:
        return Skipped(reason=f"Cannot read '{shape.path}'")
    pattern = compile_pattern(shape.pattern)
    if pattern.search(content):
        return Passed()
    return Failed(
        violations=[
            _violation(
                rule,
                shape.path,
                f"File '{shape.path}' does not match pattern '{shape.pattern}'",
                expected=shape.pattern,
            )
        ]
    )


def _file_content_not_matches(
    rule: Rule, shape: FileContentNotMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    if not snapshot.is_file(shape.path):
        return Passed()
    content = snapshot.read_text(shape.path)
    if content is None:
        return Skipped(reason=f"Cannot read '{shape.path}'")
    pattern = compile_pattern(shape.pattern)
    if not pattern.search(content):
        return Passed()
    return Failed(
        violations=[
            _violation(
                rule,
                shape.path,
                f"File '{shape.path}' contains forbidden pattern '{shape.pattern}'",
            )
        ]
    )


# --- Glob content and naming ---


def _glob_content_matches(
    rule: Rule, shape: GlobContentMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    files = _matching_files(snapshot, shape.glob)
    pattern = compile_pattern(shape.pattern)
    violations = []
    for rel in files:
        content = snapshot.read_text(rel)
        if content is None:
            continue
        if not pattern.search(content):
            violations.append(
                _violation(
                    rule,
                    rel,
                    f"File does not match pattern '{shape.pattern}'",
                    expected=shape.pattern,
                )
            )
    return _result(violations)


def _glob_content_not_matches(
    rule: Rule, shape: GlobContentNotMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    files = _matching_files(snapshot, shape.glob)
    pattern = compile_pattern(shape.pattern)
    exclude = compile_pattern(shape.exclude_pattern) if shape.exclude_pattern else None
    violations = []
    for rel in files:
        content = snapshot.read_text(rel)
        if content is None:
            continue
        for line in content.splitlines():
            if exclude is not None and exclude.search(line):
                continue
            if pattern.search(line):
                # one violation per file
                violations.append(
                    _violation(
                        rule,
                        rel,
                        f"File contains forbidden pattern '{shape.pattern}'",
                        actual=line.strip(),
                    )
                )
                break
    return _result(violations)


def _glob_naming_matches(
    rule: Rule, shape: GlobNamingMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    files = _matching_files(snapshot, shape.glob)
    pattern = compile_pattern(shape.pattern)
    violations = []
    for rel in files:
        name = _basename(rel)
        if not pattern.search(name):
            violations.append(
                _violation(
                    rule,
                    rel,
                    f"Filename '{name}' does not match pattern '{shape.pattern}'",
                    expected=shape.pattern,
                    actual=name,
                )
            )
    return _result(violations)


def _glob_naming_not_matches(
    rule: Rule, shape: GlobNamingNotMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    files = _matching_files(snapshot, shape.glob)
    pattern = compile_pattern(shape.pattern)
    violations = []
    for rel in files:
        if any(rel.startswith(prefix) for prefix in shape.exclude_paths):
            continue
        name = _basename(rel)
        if pattern.search(name):
            message = shape.message or (
                f"Filename '{name}' matches forbidden pattern '{shape.pattern}'"
            )
            violations.append(_violation(rule, rel, message, actual=name))
    return _result(violations)


# --- Manifest ---

_MISSING = object()


def lookup_key(document: Mapping[str, Any], dotted: str) -> Any:
    """Walk a dotted key path; returns the module's ``_MISSING`` sentinel if absent."""
    node: Any = document
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _manifest_key_exists(
    rule: Rule, shape: ManifestKeyExists, snapshot: ProjectSnapshot
) -> CheckResult:
    if snapshot.manifest is None:
        return Skipped(reason="No manifest found")
    if lookup_key(snapshot.manifest, shape.key) is not _MISSING:
        return Passed()
    return Failed(
        violations=[
            _violation(
                rule,
                snapshot.manifest_path,
                f"Key '{shape.key}' not found in {snapshot.manifest_path}",
                expected=shape.key,
            )
        ]
    )


def _manifest_key_matches(
    rule: Rule, shape: ManifestKeyMatches, snapshot: ProjectSnapshot
) -> CheckResult:
    if snapshot.manifest is None:
        return Skipped(reason="No manifest found")
    value = lookup_key(snapshot.manifest, shape.key)
    if value is _MISSING:
        return Skipped(reason=f"Key '{shape.key}' not found in {snapshot.manifest_path}")
    pattern = compile_pattern(shape.pattern)
    text = _stringify(value)
    if pattern.search(text):
        return Passed()
    return Failed(
        violations=[
            _violation(
                rule,
                snapshot.manifest_path,
                f"Key '{shape.key}' value '{text}' does not match pattern '{shape.pattern}'",
                expected=shape.pattern,
                actual=text,
            )
        ]
    )


def _builtin(rule: Rule, shape: Builtin, snapshot: ProjectSnapshot) -> CheckResult:
    return Skipped(reason=f"Builtin handler '{shape.handler}' is not evaluated declaratively")


_EVALUATORS: dict[type, Callable[[Rule, Any, ProjectSnapshot], CheckResult]] = {
    FileExists: _file_exists,
    DirExists: _dir_exists,
    DirNotExists: _dir_not_exists,
    FileContentMatches: _file_content_matches,
    FileContentNotMatches: _file_content_not_matches,
    GlobContentMatches: _glob_content_matches,
    GlobContentNotMatches: _glob_content_not_matches,
    GlobNamingMatches: _glob_naming_matches,
    GlobNamingNotMatches: _glob_naming_not_matches,
    ManifestKeyExists: _manifest_key_exists,
    ManifestKeyMatches: _manifest_key_matches,
    Builtin: _builtin,
}


def evaluate(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Evaluate a declarative rule against the snapshot."""
    handler = _EVALUATORS[type(rule.shape)]
    try:
        return handler(rule, rule.shape, snapshot)
    except InvalidPattern as e:
        return Skipped(reason=str(e))
