"""Build the read-only project snapshot a scan runs against."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any

from docaudit.rule_engine.models import ProjectKind, ProjectScope, ProjectSnapshot

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset({"target", "node_modules"})

LICENSE_FILES = ("LICENSE", "LICENSE.md", "LICENSE.txt")

# Upper-cased markers of well-known open-source licenses.
OSS_LICENSE_MARKERS = (
    "MIT LICENSE",
    "APACHE LICENSE",
    "GNU GENERAL PUBLIC LICENSE",
    "GNU LESSER GENERAL PUBLIC",
    "BSD ",
    "MOZILLA PUBLIC LICENSE",
    "ISC LICENSE",
    "BOOST SOFTWARE LICENSE",
    "THE UNLICENSE",
    "CREATIVE COMMONS",
    "EUROPEAN UNION PUBLIC",
    "OPEN SOFTWARE LICENSE",
    "ARTISTIC LICENSE",
    "ZLIB LICENSE",
)

MANIFEST_CANDIDATES = ("pyproject.toml", "Cargo.toml", "package.json")


def list_project_files(root: Path) -> list[str]:
    """Sorted root-relative file paths with forward slashes.

    Hidden directories and build output are not descended into.
    """
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in SKIP_DIRS
        )
        base = Path(dirpath).relative_to(root)
        for name in filenames:
            files.append((base / name).as_posix())
    return sorted(files)


def detect_project_kind(root: Path) -> ProjectKind:
    for name in LICENSE_FILES:
        path = root / name
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace").upper()
        except OSError:
            continue
        if any(marker in text for marker in OSS_LICENSE_MARKERS):
            return ProjectKind.OPEN_SOURCE
    return ProjectKind.INTERNAL


def read_manifest(root: Path) -> tuple[dict[str, Any] | None, str | None]:
    """Parse the first manifest found at the root.

    Returns ``(document, filename)``, or ``(None, None)`` when there is no
    usable manifest.
    """
    for name in MANIFEST_CANDIDATES:
        path = root / name
        if not path.is_file():
            continue
        try:
            if name.endswith(".toml"):
                with path.open("rb") as fh:
                    return tomllib.load(fh), name
            data = json.loads(path.read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unparseable manifest {path}: {e}")
            continue
        if isinstance(data, dict):
            return data, name
    return None, None


def build_snapshot(
    root: Path,
    *,
    project_kind: ProjectKind | None = None,
    project_scope: ProjectScope = ProjectScope.LARGE,
    module_filter: list[str] | None = None,
    preload: bool = False,
) -> ProjectSnapshot:
    """Enumerate ``root`` once and freeze the result.

    With ``preload`` the text of every markdown file is cached up front so
    checks running concurrently never touch the same file twice.
    """
    files = list_project_files(root)
    contents: dict[str, str] = {}
    if preload:
        for rel in files:
            if not rel.endswith(".md"):
                continue
            try:
                contents[rel] = (root / rel).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                logger.debug(f"Not caching unreadable file {rel}")
    manifest, manifest_path = read_manifest(root)
    kind = project_kind or detect_project_kind(root)
    logger.debug(f"Snapshot of {root}: {len(files)} files, kind={kind}, scope={project_scope}")
    return ProjectSnapshot(
        root=root,
        files=tuple(files),
        file_contents=MappingProxyType(contents),
        project_kind=kind,
        project_scope=project_scope,
        module_filter=tuple(module_filter) if module_filter else None,
        manifest=MappingProxyType(manifest) if manifest is not None else None,
        manifest_path=manifest_path,
    )
