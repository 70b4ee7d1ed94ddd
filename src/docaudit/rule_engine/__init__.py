"""Rule engine: rule models, loading, declarative evaluation and config."""

from docaudit.rule_engine.config import ScanConfig, load_scan_config
from docaudit.rule_engine.declarative import evaluate
from docaudit.rule_engine.globs import compile_glob, glob_to_regex
from docaudit.rule_engine.index import RuleConfigError, RuleIndex, merge_rules, parse_rule
from docaudit.rule_engine.models import (
    CheckEntry,
    CheckResult,
    Failed,
    ModuleInfo,
    Passed,
    ProjectKind,
    ProjectScope,
    ProjectSnapshot,
    Rule,
    ScanOutcome,
    ScanSummary,
    Severity,
    Skipped,
    Violation,
)
from docaudit.rule_engine.sections import iter_sections

__all__ = [
    "CheckEntry",
    "CheckResult",
    "Failed",
    "ModuleInfo",
    "Passed",
    "ProjectKind",
    "ProjectScope",
    "ProjectSnapshot",
    "Rule",
    "RuleConfigError",
    "RuleIndex",
    "ScanConfig",
    "ScanOutcome",
    "ScanSummary",
    "Severity",
    "Skipped",
    "Violation",
    "compile_glob",
    "evaluate",
    "glob_to_regex",
    "iter_sections",
    "load_scan_config",
    "merge_rules",
    "parse_rule",
]
