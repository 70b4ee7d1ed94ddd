"""Pydantic models and enums for rules, check results and project snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Severity(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ProjectKind(StrEnum):
    OPEN_SOURCE = "open_source"
    INTERNAL = "internal"


class ProjectScope(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def rank(self) -> int:
        return _SCOPE_RANK[self]


_SCOPE_RANK = {ProjectScope.SMALL: 0, ProjectScope.MEDIUM: 1, ProjectScope.LARGE: 2}


# --- Rule shapes ---


class _Shape(BaseModel):
    model_config = ConfigDict(frozen=True)

    def fix_hint(self) -> str:
        raise NotImplementedError


class FileExists(_Shape):
    type: Literal["file_exists"] = "file_exists"
    path: str

    def fix_hint(self) -> str:
        return f"Create the file '{self.path}'"


class DirExists(_Shape):
    type: Literal["dir_exists"] = "dir_exists"
    path: str

    def fix_hint(self) -> str:
        return f"Create the directory '{self.path}'"


class DirNotExists(_Shape):
    type: Literal["dir_not_exists"] = "dir_not_exists"
    path: str
    message: str

    def fix_hint(self) -> str:
        return f"Remove the directory '{self.path}'"


class FileContentMatches(_Shape):
    type: Literal["file_content_matches"] = "file_content_matches"
    path: str
    pattern: str

    def fix_hint(self) -> str:
        return f"Update '{self.path}' so its content matches pattern '{self.pattern}'"


class FileContentNotMatches(_Shape):
    type: Literal["file_content_not_matches"] = "file_content_not_matches"
    path: str
    pattern: str

    def fix_hint(self) -> str:
        return f"Remove content matching '{self.pattern}' from '{self.path}'"


class GlobContentMatches(_Shape):
    type: Literal["glob_content_matches"] = "glob_content_matches"
    glob: str
    pattern: str

    def fix_hint(self) -> str:
        return f"Ensure files matching '{self.glob}' contain pattern '{self.pattern}'"


class GlobContentNotMatches(_Shape):
    type: Literal["glob_content_not_matches"] = "glob_content_not_matches"
    glob: str
    pattern: str
    exclude_pattern: str | None = None

    def fix_hint(self) -> str:
        return f"Remove content matching '{self.pattern}' from files matching '{self.glob}'"


class GlobNamingMatches(_Shape):
    type: Literal["glob_naming_matches"] = "glob_naming_matches"
    glob: str
    pattern: str

    def fix_hint(self) -> str:
        return f"Rename files matching '{self.glob}' to follow pattern '{self.pattern}'"


class GlobNamingNotMatches(_Shape):
    type: Literal["glob_naming_not_matches"] = "glob_naming_not_matches"
    glob: str
    pattern: str
    exclude_paths: list[str] = Field(default_factory=list)
    message: str | None = None

    def fix_hint(self) -> str:
        return f"Rename files matching '{self.glob}' so they avoid pattern '{self.pattern}'"


class ManifestKeyExists(_Shape):
    type: Literal["manifest_key_exists"] = "manifest_key_exists"
    key: str

    def fix_hint(self) -> str:
        return f"Add key '{self.key}' to the project manifest"


class ManifestKeyMatches(_Shape):
    type: Literal["manifest_key_matches"] = "manifest_key_matches"
    key: str
    pattern: str

    def fix_hint(self) -> str:
        return f"Update key '{self.key}' in the project manifest to match '{self.pattern}'"


class Builtin(_Shape):
    type: Literal["builtin"] = "builtin"
    handler: str

    def fix_hint(self) -> str:
        return f"Fix the issue detected by builtin check '{self.handler}'"


RuleShape = Annotated[
    FileExists
    | DirExists
    | DirNotExists
    | FileContentMatches
    | FileContentNotMatches
    | GlobContentMatches
    | GlobContentNotMatches
    | GlobNamingMatches
    | GlobNamingNotMatches
    | ManifestKeyExists
    | ManifestKeyMatches
    | Builtin,
    Field(discriminator="type"),
]

SHAPE_TYPES: tuple[type[_Shape], ...] = (
    FileExists,
    DirExists,
    DirNotExists,
    FileContentMatches,
    FileContentNotMatches,
    GlobContentMatches,
    GlobContentNotMatches,
    GlobNamingMatches,
    GlobNamingNotMatches,
    ManifestKeyExists,
    ManifestKeyMatches,
    Builtin,
)


class Rule(BaseModel):
    """An immutable rule definition."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    category: str
    description: str
    severity: Severity
    shape: RuleShape
    project_kind: ProjectKind | None = None
    scope: ProjectScope | None = None
    module_filter: tuple[str, ...] | None = None
    depends_on: tuple[int, ...] = ()
    fix_hint: str | None = None

    def hint(self) -> str:
        return self.fix_hint or self.shape.fix_hint()


# --- Results ---


class Violation(BaseModel):
    rule_id: int
    path: str | None = None
    message: str
    severity: Severity
    expected: str | None = None
    actual: str | None = None
    fix_hint: str | None = None


class Passed(BaseModel):
    status: Literal["pass"] = "pass"


class Failed(BaseModel):
    status: Literal["fail"] = "fail"
    violations: list[Violation] = Field(min_length=1)


class Skipped(BaseModel):
    status: Literal["skip"] = "skip"
    reason: str


CheckResult = Annotated[Passed | Failed | Skipped, Field(discriminator="status")]


class CheckEntry(BaseModel):
    id: int
    category: str
    description: str
    result: CheckResult


class ScanSummary(BaseModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0


class ScanOutcome(BaseModel):
    """Ordered per-rule results plus aggregate counts for one scan."""

    entries: list[CheckEntry] = Field(default_factory=list)
    summary: ScanSummary = Field(default_factory=ScanSummary)
    project_kind: ProjectKind
    project_scope: ProjectScope


class ModuleInfo(BaseModel):
    path: str  # root-relative, forward slashes
    name: str


# --- Snapshot ---


@dataclass(frozen=True)
class ProjectSnapshot:
    """Read-only view of a project shared by every check in one scan."""

    root: Path
    files: tuple[str, ...] = ()
    file_contents: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    project_kind: ProjectKind = ProjectKind.INTERNAL
    project_scope: ProjectScope = ProjectScope.LARGE
    module_filter: tuple[str, ...] | None = None
    manifest: Mapping[str, Any] | None = None
    manifest_path: str | None = None

    def read_text(self, rel: str) -> str | None:
        """Return the text of a root-relative file, or None if it cannot be read."""
        cached = self.file_contents.get(rel)
        if cached is not None:
            return cached
        try:
            return (self.root / rel).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def exists(self, rel: str) -> bool:
        return (self.root / rel).exists()

    def is_file(self, rel: str) -> bool:
        return (self.root / rel).is_file()

    def is_dir(self, rel: str) -> bool:
        return (self.root / rel).is_dir()

    def files_under(self, prefix: str, suffix: str = "", *, recursive: bool = True) -> list[str]:
        """Enumerated files below ``prefix`` (a directory) ending in ``suffix``."""
        base = prefix.rstrip("/") + "/"
        found = []
        for rel in self.files:
            if not rel.startswith(base) or not rel.endswith(suffix):
                continue
            if not recursive and "/" in rel[len(base) :]:
                continue
            found.append(rel)
        return found
