"""Requirements and standards-section checks.

The SRS checks walk ``#### FR-n:`` / ``#### NFR-n:`` blocks of
``docs/1-requirements/srs.md`` with the shared section scanner. The
section-presence checks look for the headings a standards-aligned document is
expected to carry (ISO/IEC/IEEE 42010, 29119-3, 26514, 12207, IEEE 1028,
ISO/IEC 25010 and 25040).
"""

from __future__ import annotations

import re

from docaudit.checks._common import (
    Findings,
    SectionSet,
    check_document_sections,
    check_module_sections,
    missing_labels,
    plural,
)
from docaudit.rule_engine.models import CheckResult, ProjectSnapshot, Rule, Skipped
from docaudit.rule_engine.sections import (
    HEADING_BOUNDARY,
    REQUIREMENT_HEADING,
    attribute_label,
    is_attribute_row,
    iter_sections,
)

SRS_PATH = "docs/1-requirements/srs.md"

REQUIRED_ATTRIBUTES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Priority", re.compile(r"\*\*Priority\*\*")),
    ("State", re.compile(r"\*\*State\*\*")),
    ("Verification", re.compile(r"\*\*Verification\*\*")),
    ("Traces to", re.compile(r"\*\*Traces\s+to\*\*|\*\*Traceability\*\*")),
    ("Acceptance", re.compile(r"\*\*Acceptance\*\*")),
)

SOURCE_FILE_RE = re.compile(r"\.\b(rs|py|ts|tsx|js|jsx|go|java|rb|c|cpp|hpp|h|cs|swift|kt)\b")
DOWNSTREAM_RE = re.compile(r"[2-7]-(planning|design|development|testing|deployment|operations)/")

NO_REQUIREMENT_BLOCKS = "No FR/NFR requirement blocks found in SRS"


def _requirement_blocks(snapshot: ProjectSnapshot) -> list[tuple[str, str]] | Skipped:
    content = snapshot.read_text(SRS_PATH)
    if content is None:
        return Skipped(reason=f"Cannot read {SRS_PATH}")
    return list(iter_sections(content.splitlines(), REQUIREMENT_HEADING, HEADING_BOUNDARY))


def srs_attributes(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    """Each requirement block carries the full attribute table."""
    findings = Findings(rule)
    if not snapshot.is_file(SRS_PATH):
        # The SRS itself is mandatory.
        findings.add(SRS_PATH, f"File '{SRS_PATH}' does not exist")
        return findings.result()
    blocks = _requirement_blocks(snapshot)
    if isinstance(blocks, Skipped):
        return blocks
    if not blocks:
        return Skipped(reason=NO_REQUIREMENT_BLOCKS)
    for req_id, block in blocks:
        missing = missing_labels(block, REQUIRED_ATTRIBUTES)
        if missing:
            findings.add(
                SRS_PATH,
                f"{req_id} missing {', '.join(missing)} attribute{plural(missing)}",
                expected=", ".join(label for label, _ in REQUIRED_ATTRIBUTES),
            )
    return findings.result()


def _forbidden_references(
    rule: Rule,
    snapshot: ProjectSnapshot,
    pattern: re.Pattern[str],
    message: str,
    exempt: frozenset[str] = frozenset(),
) -> CheckResult:
    if not snapshot.is_file(SRS_PATH):
        return Skipped(reason=f"{SRS_PATH} not found")
    blocks = _requirement_blocks(snapshot)
    if isinstance(blocks, Skipped):
        return blocks
    if not blocks:
        return Skipped(reason=NO_REQUIREMENT_BLOCKS)
    findings = Findings(rule)
    for req_id, block in blocks:
        for line in block.splitlines():
            if not is_attribute_row(line):
                continue
            label = attribute_label(line)
            if label in exempt:
                continue
            if pattern.search(line):
                findings.add(
                    SRS_PATH,
                    message.format(id=req_id, attr=label),
                    actual=line.strip(),
                )
                break
    return findings.result()


def srs_no_tech_details(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _forbidden_references(
        rule,
        snapshot,
        SOURCE_FILE_RE,
        "{id}: attribute '{attr}' contains source-code file reference",
    )


def srs_no_downstream_refs(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return _forbidden_references(
        rule,
        snapshot,
        DOWNSTREAM_RE,
        "{id}: attribute '{attr}' references downstream SDLC artifact",
        exempt=frozenset({"Acceptance"}),
    )


ARCHITECTURE = SectionSet(
    doc_path="docs/3-design/architecture.md",
    title="Architecture document",
    module_title="architecture",
    standard="42010",
    sections=(
        ("Stakeholders", re.compile(r"(?i)(stakeholder|## who\b)")),
        ("Concerns/rationale", re.compile(r"(?i)(concern|rationale|## why\b|design.decision)")),
        (
            "Viewpoints/views",
            re.compile(
                r"(?i)(viewpoint|## what\b|## how\b|layer.model|layer.architect|system.diagram)"
            ),
        ),
    ),
)

TEST_STRATEGY = SectionSet(
    doc_path="docs/5-testing/testing_strategy.md",
    title="Testing strategy",
    module_title="testing strategy",
    standard="29119-3",
    sections=(
        ("Strategy/scope", re.compile(r"(?i)(test.strateg|test.scope|test.design|test.approach)")),
        (
            "Test cases/categories",
            re.compile(r"(?i)(test.categor|test.case|test.plan|test.pyramid)"),
        ),
        (
            "Coverage/criteria",
            re.compile(r"(?i)(coverage.target|exit.criteria|entry.criteria|test.procedure)"),
        ),
    ),
)

DEVELOPER_GUIDE = SectionSet(
    doc_path="docs/4-development/developer_guide.md",
    title="Developer guide",
    module_title="developer guide",
    standard="26514",
    sections=(
        (
            "Build/setup",
            re.compile(r"(?i)(build|setup|install|getting.started|quick.start|prerequisite)"),
        ),
        (
            "Project structure",
            re.compile(r"(?i)(project.structure|codebase|architecture|directory|layout|key.files)"),
        ),
        (
            "Extension/contribution",
            re.compile(r"(?i)(adding|extend|contribut|modif|new.check|new.feature|how.to)"),
        ),
    ),
)

PRODUCTION_READINESS = SectionSet(
    doc_path="docs/6-deployment/production_readiness.md",
    title="Production readiness",
    module_title="production readiness",
    standard="25010",
    sections=(
        ("Security", re.compile(r"(?i)(##\s+\d*\.?\s*security|security\s*\|)")),
        ("Test Coverage", re.compile(r"(?i)(##\s+\d*\.?\s*test.coverage|test.coverage\s*\|)")),
        ("Observability", re.compile(r"(?i)(##\s+\d*\.?\s*observability|observability\s*\|)")),
        (
            "Backwards Compatibility",
            re.compile(r"(?i)(##\s+\d*\.?\s*backwards.compat|compatibility\s*\|)"),
        ),
        ("Runtime Safety", re.compile(r"(?i)(##\s+\d*\.?\s*runtime.safety|runtime.safety\s*\|)")),
        ("Verdict", re.compile(r"(?i)(verdict|ready\s*\|\s*not.ready|PASS.*WARN.*FAIL)")),
    ),
)

BACKLOG = SectionSet(
    doc_path="docs/2-planning/backlog.md",
    title="Backlog",
    module_title="backlog",
    standard="planning",
    sections=(
        (
            "Backlog items",
            re.compile(r"(?i)(backlog.item|high.priority|medium.priority|low.priority|## todo\b)"),
        ),
        (
            "Completed",
            re.compile(r"(?i)(## completed|## done\b|## finished\b|## resolved\b|\- \[x\])"),
        ),
        (
            "Blockers",
            re.compile(r"(?i)(## blocker|## impediment|## blocked.by|## depend|## risk)"),
        ),
    ),
)


PRODUCTION_READINESS_PATH = PRODUCTION_READINESS.doc_path

PRODUCTION_LIFECYCLE = SectionSet(
    doc_path=PRODUCTION_READINESS_PATH,
    title="Production readiness",
    module_title="production readiness",
    standard="12207",
    sections=(
        ("CI/CD Pipeline", re.compile(r"(?i)(##\s+\d*\.?\s*ci/?cd|ci/?cd.pipeline\s*\|)")),
        (
            "Dependency Health",
            re.compile(r"(?i)(##\s+\d*\.?\s*dependenc.+health|dependency.health\s*\|)"),
        ),
        (
            "Dependency Auditing",
            re.compile(r"(?i)(##\s+\d*\.?\s*dependenc.+audit|dependency.audit\w*\s*\|)"),
        ),
        (
            "Package Metadata",
            re.compile(r"(?i)(##\s+\d*\.?\s*package.metadata|package.metadata\s*\|)"),
        ),
        (
            "Release Automation",
            re.compile(r"(?i)(##\s+\d*\.?\s*release.automat|release.automat\w*\s*\|)"),
        ),
    ),
)

PRODUCTION_SUPPLEMENTARY = SectionSet(
    doc_path=PRODUCTION_READINESS_PATH,
    title="Production readiness",
    module_title="production readiness",
    standard="25010 supplementary",
    sections=(
        (
            "Static Analysis",
            re.compile(r"(?i)(##\s+\d*\.?\s*static.analysis|static.analysis\s*\|)"),
        ),
        ("API Documentation", re.compile(r"(?i)(##\s+\d*\.?\s*api.doc|api.doc\w*\s*\|)")),
        ("README & Onboarding", re.compile(r"(?i)(##\s+\d*\.?\s*readme|readme.*onboarding\s*\|)")),
        ("Documentation Lint", re.compile(r"(?i)(##\s+\d*\.?\s*doc.*lint|doc.*lint\s*\|)")),
    ),
)

PRODUCTION_EVALUATION = SectionSet(
    doc_path=PRODUCTION_READINESS_PATH,
    title="Production readiness",
    module_title="production readiness",
    standard="25040",
    sections=(
        ("Scoring", re.compile(r"(?i)(##\s+scor|PASS.*WARN.*FAIL)")),
        ("Sign-Off", re.compile(r"(?i)(##\s+sign.off|role.*name.*date.*verdict)")),
    ),
)

AUDIT_REPORT = SectionSet(
    doc_path="docs/2-planning/audit_report.md",
    title="Audit report",
    module_title="audit report",
    standard="IEEE 1028",
    sections=(
        ("Scope", re.compile(r"(?i)(##\s+scope|##\s+audit\s+scope|objective)")),
        ("Findings", re.compile(r"(?i)(##\s+finding|##\s+observation|non.conform)")),
        ("Recommendations", re.compile(r"(?i)(##\s+recommend|corrective.action|##\s+action)")),
    ),
)

# ISO/IEC/IEEE 29119-3 clauses 7-10, one document each.
TEST_PLAN = SectionSet(
    doc_path="docs/5-testing/test_plan.md",
    title="Test plan",
    module_title="test plan",
    standard="29119-3",
    sections=(
        (
            "Objectives/scope",
            re.compile(r"(?i)(##\s+objective|##\s+scope|##\s+purpose|test.objective)"),
        ),
        (
            "Schedule/milestones",
            re.compile(r"(?i)(##\s+schedule|##\s+milestone|##\s+timeline|test.schedule)"),
        ),
        (
            "Environment/resources",
            re.compile(
                r"(?i)(##\s+environment|##\s+resource|##\s+infrastructure|test.environment)"
            ),
        ),
    ),
)

TEST_DESIGN = SectionSet(
    doc_path="docs/5-testing/test_design.md",
    title="Test design",
    module_title="test design",
    standard="29119-3",
    sections=(
        (
            "Test conditions",
            re.compile(r"(?i)(##\s+test.condition|##\s+condition|##\s+feature|test.condition)"),
        ),
        (
            "Test coverage",
            re.compile(
                r"(?i)(##\s+coverage|##\s+coverage.criteria|coverage.approach|test.coverage)"
            ),
        ),
        (
            "Traceability",
            re.compile(r"(?i)(##\s+traceability|##\s+requirement.mapping|traces.to|trace.matrix)"),
        ),
    ),
)

TEST_CASES = SectionSet(
    doc_path="docs/5-testing/test_cases.md",
    title="Test cases",
    module_title="test cases",
    standard="29119-3",
    sections=(
        ("Test case ID/title", re.compile(r"(?i)(##\s+test.case|test.case.id|TC-\d|test.id)")),
        (
            "Pre-conditions/steps",
            re.compile(r"(?i)(##\s+step|##\s+pre.condition|##\s+procedure|test.step)"),
        ),
        (
            "Expected results",
            re.compile(r"(?i)(##\s+expected|expected.result|pass.criteria|acceptance.criteria)"),
        ),
    ),
)

VERIFICATION_REPORT = SectionSet(
    doc_path="docs/5-testing/verification_report.md",
    title="Verification report",
    module_title="verification report",
    standard="29119-3",
    sections=(
        (
            "Summary/results",
            re.compile(r"(?i)(##\s+summary|##\s+result|##\s+overview|test.result)"),
        ),
        ("Pass/fail status", re.compile(r"(?i)(##\s+status|##\s+pass|##\s+verdict|pass.*fail)")),
        (
            "Defects/issues",
            re.compile(r"(?i)(##\s+defect|##\s+issue|##\s+bug|##\s+finding|defect.summary)"),
        ),
    ),
)


def arch_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_module_sections(rule, snapshot, ARCHITECTURE)


def testing_strategy_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_module_sections(rule, snapshot, TEST_STRATEGY)


def dev_guide_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_module_sections(rule, snapshot, DEVELOPER_GUIDE)


def prod_readiness_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, PRODUCTION_READINESS)


def backlog_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, BACKLOG)


def prod_readiness_exists(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    findings = Findings(rule)
    if not snapshot.exists(PRODUCTION_READINESS_PATH):
        findings.add(PRODUCTION_READINESS_PATH, "Production readiness document does not exist")
    return findings.result()


def prod_readiness_12207_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, PRODUCTION_LIFECYCLE)


def prod_readiness_25010_supp_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, PRODUCTION_SUPPLEMENTARY)


def prod_readiness_25040_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, PRODUCTION_EVALUATION)


def audit_report_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, AUDIT_REPORT)


def testing_plan_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, TEST_PLAN)


def testing_design_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, TEST_DESIGN)


def testing_cases_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, TEST_CASES)


def verification_report_sections(rule: Rule, snapshot: ProjectSnapshot) -> CheckResult:
    return check_document_sections(rule, snapshot, VERIFICATION_REPORT)
