"""One-call entry point: scan a project directory with the configured rules."""

from __future__ import annotations

import logging
from pathlib import Path

from docaudit.project.snapshot import build_snapshot
from docaudit.rule_engine.config import ScanConfig
from docaudit.rule_engine.index import RuleIndex
from docaudit.rule_engine.models import ScanOutcome
from docaudit.rule_engine.registry import build_checks
from docaudit.rule_engine.runner import run_checks, select_checks, summarize

logger = logging.getLogger(__name__)


class ScanPathError(Exception):
    """Raised when the project root is missing or not a directory."""


def scan_project(root: Path, config: ScanConfig | None = None) -> ScanOutcome:
    """Scan ``root`` and return ordered per-rule results with a summary.

    Raises:
        ScanPathError: ``root`` is not an existing directory.
        RuleConfigError: the rules file cannot be parsed.
    """
    config = config or ScanConfig()
    if not root.is_dir():
        raise ScanPathError(f"Project root does not exist: {root}")

    index = RuleIndex.load_merged(config.rules_path)
    checks = select_checks(
        build_checks(index.rules),
        ids=config.checks,
        categories=config.categories,
    )
    snapshot = build_snapshot(
        root,
        project_kind=config.project_kind,
        project_scope=config.project_scope,
        module_filter=config.modules,
        preload=config.preload,
    )
    logger.debug(f"Running {len(checks)} check(s) against {root}")
    entries = run_checks(checks, snapshot, max_workers=config.max_workers)
    return ScanOutcome(
        entries=entries,
        summary=summarize(entries),
        project_kind=snapshot.project_kind,
        project_scope=snapshot.project_scope,
    )
