"""Project snapshot construction and module discovery."""

from docaudit.project.modules import discover_modules, select_modules
from docaudit.project.snapshot import (
    build_snapshot,
    detect_project_kind,
    list_project_files,
    read_manifest,
)

__all__ = [
    "build_snapshot",
    "detect_project_kind",
    "discover_modules",
    "list_project_files",
    "read_manifest",
    "select_modules",
]
