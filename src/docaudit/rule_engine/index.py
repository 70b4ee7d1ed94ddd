"""RuleIndex: load the bundled rule catalogue and merge project overrides."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docaudit.rule_engine.models import SHAPE_TYPES, Rule

logger = logging.getLogger(__name__)

SHAPES_BY_TYPE = {shape.model_fields["type"].default: shape for shape in SHAPE_TYPES}

_BASE_FIELDS = ("id", "category", "description", "severity", "type")


class RuleConfigError(Exception):
    """Raised when a rule definition cannot be turned into a Rule."""


def parse_rule(record: Mapping[str, Any]) -> Rule:
    """Build a Rule from a flat record (``type`` tag plus shape fields)."""
    rule_id = record.get("id", "?")
    missing = [name for name in _BASE_FIELDS if name not in record]
    if missing:
        raise RuleConfigError(f"Rule {rule_id}: missing field(s) {', '.join(missing)}")

    shape_cls = SHAPES_BY_TYPE.get(record["type"])
    if shape_cls is None:
        raise RuleConfigError(f"Rule {rule_id}: unknown rule type '{record['type']}'")

    shape: dict[str, Any] = {
        name: record[name] for name in shape_cls.model_fields if name in record
    }
    shape["type"] = record["type"]
    if record["type"] == "dir_not_exists" and "message" not in shape and "path" in shape:
        shape["message"] = f"{shape['path']} should not exist"

    data: dict[str, Any] = {
        "id": rule_id,
        "category": record["category"],
        "description": record["description"],
        "severity": record["severity"],
        "shape": shape,
        "project_kind": record.get("project_type"),
        "scope": record.get("scope"),
        "module_filter": record.get("module_filter"),
        "depends_on": record.get("depends_on", ()),
        "fix_hint": record.get("fix_hint"),
    }
    try:
        return Rule.model_validate(data)
    except ValidationError as e:
        raise RuleConfigError(f"Rule {rule_id}: {e}") from e


def parse_rules(records: Iterable[Mapping[str, Any]]) -> list[Rule]:
    rules = [parse_rule(record) for record in records]
    seen: set[int] = set()
    for rule in rules:
        if rule.id in seen:
            raise RuleConfigError(f"Duplicate rule id {rule.id}")
        seen.add(rule.id)
    return rules


def parse_rules_toml(text: str) -> list[Rule]:
    """Parse a document of ``[[rules]]`` tables."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise RuleConfigError(f"Invalid rules TOML: {e}") from e
    records = data.get("rules", [])
    if not isinstance(records, list):
        raise RuleConfigError("'rules' must be an array of tables")
    return parse_rules(records)


def load_rule_file(path: Path) -> list[Rule]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RuleConfigError(f"Cannot read rules file {path}: {e}") from e
    return parse_rules_toml(text)


def merge_rules(defaults: Iterable[Rule], overrides: Iterable[Rule]) -> list[Rule]:
    """Overrides replace defaults with the same id; new ids are added. Ordered by id."""
    merged = {rule.id: rule for rule in defaults}
    for rule in overrides:
        if rule.id in merged:
            logger.debug(f"Rule {rule.id} overridden")
        merged[rule.id] = rule
    return sorted(merged.values(), key=lambda r: r.id)


class RuleIndex:
    """Id-ordered rule set."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules = sorted(rules, key=lambda r: r.id)
        self._by_id: dict[int, Rule] = {r.id: r for r in self._rules}

    @classmethod
    def load(cls) -> RuleIndex:
        """Load the bundled default catalogue."""
        pkg = resources.files("docaudit.rule_engine")
        text = pkg.joinpath("default_rules.toml").read_text(encoding="utf-8")
        return cls(parse_rules_toml(text))

    @classmethod
    def load_merged(cls, rules_path: Path | None = None) -> RuleIndex:
        """Bundled catalogue with the rules in ``rules_path`` layered on top."""
        bundled = cls.load()
        if rules_path is None:
            return bundled
        overrides = load_rule_file(rules_path)
        logger.debug(f"Loaded {len(overrides)} rule(s) from {rules_path}")
        return cls(merge_rules(bundled.rules, overrides))

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def get(self, rule_id: int) -> Rule | None:
        return self._by_id.get(rule_id)

    def __len__(self) -> int:
        return len(self._rules)
