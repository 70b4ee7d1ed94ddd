"""ScanConfig dataclass and loader for scan settings."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from docaudit.rule_engine.models import ProjectKind, ProjectScope

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".docaudit.json"


@dataclass
class ScanConfig:
    project_kind: ProjectKind | None = None  # None: detect from LICENSE
    project_scope: ProjectScope = ProjectScope.LARGE
    checks: list[int] | None = None
    categories: list[str] | None = None
    modules: list[str] | None = None
    rules_path: Path | None = None
    max_workers: int = 1
    preload: bool = False


def load_scan_config(path: Path | None = None) -> ScanConfig:
    """Load scan config from the "scan" section of .docaudit.json."""
    config = ScanConfig()
    if path and path.exists():
        try:
            text = path.read_text(encoding="utf-8")
            if text.strip():
                data = json.loads(text)
                section = data.get("scan", {}) if isinstance(data, dict) else None
                if isinstance(section, dict):
                    _apply(config, section, base=path.parent)
                else:
                    logger.warning(f"Ignoring {path}: 'scan' is not an object")
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load scan config from {path}: {e}")
    _apply_env(config)
    return config


def _apply(cfg: ScanConfig, data: dict[str, object], *, base: Path) -> None:
    if "project_kind" in data and data["project_kind"] in ProjectKind.__members__.values():
        cfg.project_kind = ProjectKind(data["project_kind"])
    if "project_scope" in data and data["project_scope"] in ProjectScope.__members__.values():
        cfg.project_scope = ProjectScope(data["project_scope"])
    checks = data.get("checks")
    if isinstance(checks, list) and all(isinstance(c, int) for c in checks):
        cfg.checks = list(checks)
    for key in ("categories", "modules"):
        value = data.get(key)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            setattr(cfg, key, list(value))
    if isinstance(data.get("rules_path"), str):
        cfg.rules_path = base / str(data["rules_path"])
    if isinstance(data.get("max_workers"), int) and data["max_workers"] >= 1:
        cfg.max_workers = data["max_workers"]
    if isinstance(data.get("preload"), bool):
        cfg.preload = data["preload"]


def _apply_env(cfg: ScanConfig) -> None:
    val = os.environ.get("DOCAUDIT_PROJECT_SCOPE")
    if val and val in ProjectScope.__members__.values():
        cfg.project_scope = ProjectScope(val)
    val = os.environ.get("DOCAUDIT_PROJECT_KIND")
    if val and val in ProjectKind.__members__.values():
        cfg.project_kind = ProjectKind(val)
    if val := os.environ.get("DOCAUDIT_RULES_PATH"):
        cfg.rules_path = Path(val)
    if val := os.environ.get("DOCAUDIT_MAX_WORKERS"):
        try:
            cfg.max_workers = max(1, int(val))
        except ValueError:
            pass
