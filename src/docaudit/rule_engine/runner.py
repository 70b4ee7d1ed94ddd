"""Select, execute and summarise checks against one project snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from docaudit.rule_engine.models import (
    CheckEntry,
    CheckResult,
    Failed,
    Passed,
    ProjectSnapshot,
    Rule,
    ScanSummary,
    Skipped,
)
from docaudit.rule_engine.registry import Check

logger = logging.getLogger(__name__)


def select_checks(
    checks: Iterable[Check],
    *,
    ids: Iterable[int] | None = None,
    categories: Iterable[str] | None = None,
) -> list[Check]:
    """Checks picked by id and category filters, in rule-id order."""
    wanted_ids = set(ids) if ids is not None else None
    wanted_categories = set(categories) if categories is not None else None
    selected = [
        check
        for check in checks
        if (wanted_ids is None or check.rule.id in wanted_ids)
        and (wanted_categories is None or check.rule.category in wanted_categories)
    ]
    return sorted(selected, key=lambda c: c.rule.id)


def inapplicable_reason(rule: Rule, snapshot: ProjectSnapshot) -> str | None:
    """Why ``rule`` does not apply to this project, or None when it does."""
    if rule.project_kind is not None and rule.project_kind != snapshot.project_kind:
        return (
            f"Skipped: requires {rule.project_kind} project "
            f"(detected {snapshot.project_kind})"
        )
    if rule.scope is not None and rule.scope.rank > snapshot.project_scope.rank:
        return f"Skipped: requires {rule.scope} scope (configured {snapshot.project_scope})"
    return None


def run_check(check: Check, snapshot: ProjectSnapshot) -> CheckEntry:
    rule = check.rule
    reason = inapplicable_reason(rule, snapshot)
    if reason is not None:
        result: CheckResult = Skipped(reason=reason)
    else:
        try:
            result = check.run(snapshot)
        except Exception as e:
            logger.exception(f"Check {rule.id} raised: {e}")
            result = Skipped(reason=f"Check raised {type(e).__name__}: {e}")
    logger.debug(f"Rule {rule.id} ({rule.category}): {result.status}")
    return CheckEntry(
        id=rule.id,
        category=rule.category,
        description=rule.description,
        result=result,
    )


def run_checks(
    checks: Sequence[Check],
    snapshot: ProjectSnapshot,
    *,
    max_workers: int = 1,
) -> list[CheckEntry]:
    """Run ``checks`` and return entries in the order given.

    With ``max_workers > 1`` checks execute on a thread pool; the report order
    still follows ``checks``.
    """
    if max_workers <= 1 or len(checks) <= 1:
        return [run_check(check, snapshot) for check in checks]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda check: run_check(check, snapshot), checks))


def summarize(entries: Iterable[CheckEntry]) -> ScanSummary:
    summary = ScanSummary()
    for entry in entries:
        summary.total += 1
        if isinstance(entry.result, Passed):
            summary.passed += 1
        elif isinstance(entry.result, Failed):
            summary.failed += 1
        else:
            summary.skipped += 1
    return summary
