"""Check registry: one runnable check per rule."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from docaudit.checks import HANDLERS, Handler
from docaudit.rule_engine.declarative import evaluate
from docaudit.rule_engine.models import Builtin, CheckResult, ProjectSnapshot, Rule, Skipped

logger = logging.getLogger(__name__)


class Check(Protocol):
    rule: Rule

    def run(self, snapshot: ProjectSnapshot) -> CheckResult: ...


class DeclarativeCheck:
    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def run(self, snapshot: ProjectSnapshot) -> CheckResult:
        return evaluate(self.rule, snapshot)


class BuiltinCheck:
    def __init__(self, rule: Rule, handler: Handler) -> None:
        self.rule = rule
        self._handler = handler

    def run(self, snapshot: ProjectSnapshot) -> CheckResult:
        return self._handler(self.rule, snapshot)


class UnresolvedCheck:
    """Stands in for a builtin rule whose handler is not registered."""

    def __init__(self, rule: Rule, handler_name: str) -> None:
        self.rule = rule
        self.handler_name = handler_name

    def run(self, snapshot: ProjectSnapshot) -> CheckResult:
        return Skipped(reason=f"Unknown builtin handler '{self.handler_name}'")


def build_check(rule: Rule, handlers: dict[str, Handler] | None = None) -> Check:
    handlers = HANDLERS if handlers is None else handlers
    if not isinstance(rule.shape, Builtin):
        return DeclarativeCheck(rule)
    handler = handlers.get(rule.shape.handler)
    if handler is None:
        logger.warning(f"Rule {rule.id}: unknown builtin handler '{rule.shape.handler}'")
        return UnresolvedCheck(rule, rule.shape.handler)
    return BuiltinCheck(rule, handler)


def build_checks(rules: Iterable[Rule], handlers: dict[str, Handler] | None = None) -> list[Check]:
    """Build checks for ``rules`` ordered by rule id."""
    return [build_check(rule, handlers) for rule in sorted(rules, key=lambda r: r.id)]
