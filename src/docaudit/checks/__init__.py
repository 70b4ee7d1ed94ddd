"""Builtin check library, keyed by handler name."""

from docaudit.checks import (
    adr,
    content,
    modules,
    naming,
    navigation,
    requirements,
    structure,
    traceability,
)
from docaudit.checks._common import Findings, Handler

HANDLERS: dict[str, Handler] = {
    # structure
    "sdlc_phase_numbering": structure.sdlc_phase_numbering,
    "sdlc_phase_order": structure.sdlc_phase_order,
    "module_docs_plural": structure.module_docs_plural,
    "module_docs_exclusive": structure.module_docs_exclusive,
    "checklist_completeness": structure.checklist_completeness,
    "open_source_community_files": structure.open_source_community_files,
    "open_source_github_templates": structure.open_source_github_templates,
    "templates_populated": structure.templates_populated,
    # content
    "tldr_required": content.tldr_required,
    "tldr_unneeded": content.tldr_unneeded,
    "glossary_format": content.glossary_format,
    "glossary_alphabetized": content.glossary_alphabetized,
    "glossary_acronyms": content.glossary_acronyms,
    "readme_line_count": content.readme_line_count,
    "hardcoded_paths": content.hardcoded_paths,
    # naming
    "filename_underscores": naming.filename_underscores,
    "guide_naming": naming.guide_naming,
    "testing_file_placement": naming.testing_file_placement,
    # navigation
    "w3h_hub": navigation.w3h_hub,
    "hub_links_phases": navigation.hub_links_phases,
    "no_deep_links": navigation.no_deep_links,
    "link_resolution": navigation.link_resolution,
    "w3h_extended": navigation.w3h_extended,
    # adr
    "adr_naming": adr.adr_naming,
    "adr_index_completeness": adr.adr_index_completeness,
    # requirements
    "srs_attributes": requirements.srs_attributes,
    "srs_no_tech_details": requirements.srs_no_tech_details,
    "srs_no_downstream_refs": requirements.srs_no_downstream_refs,
    "arch_sections": requirements.arch_sections,
    "testing_strategy_sections": requirements.testing_strategy_sections,
    "dev_guide_sections": requirements.dev_guide_sections,
    "prod_readiness_sections": requirements.prod_readiness_sections,
    "prod_readiness_exists": requirements.prod_readiness_exists,
    "prod_readiness_12207_sections": requirements.prod_readiness_12207_sections,
    "prod_readiness_25010_supp_sections": requirements.prod_readiness_25010_supp_sections,
    "prod_readiness_25040_sections": requirements.prod_readiness_25040_sections,
    "audit_report_sections": requirements.audit_report_sections,
    "testing_plan_sections": requirements.testing_plan_sections,
    "testing_design_sections": requirements.testing_design_sections,
    "testing_cases_sections": requirements.testing_cases_sections,
    "verification_report_sections": requirements.verification_report_sections,
    "backlog_sections": requirements.backlog_sections,
    # traceability
    "phase_artifact_presence": traceability.phase_artifact_presence,
    "design_traces_requirements": traceability.design_traces_requirements,
    "plan_traces_design": traceability.plan_traces_design,
    "backlog_traces_requirements": traceability.backlog_traces_requirements,
    # modules
    "module_readme_w3h": modules.module_readme_w3h,
    "module_examples": modules.module_examples,
    "module_tests": modules.module_tests,
    "module_toolchain_doc": modules.module_toolchain_doc,
    "module_deployment_docs": modules.module_deployment_docs,
}

__all__ = ["HANDLERS", "Findings", "Handler"]
