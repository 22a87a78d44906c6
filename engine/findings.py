"""
Findings collector — advisory text explaining what fired for a record.

Findings never feed back into scoring.
"""

from models import CRAInput, CRAEngineConfig
from engine.component_scoring import resolve_country_code
from engine.overrides import OverrideDecision
from utilities.reference_data import JURISDICTION_LABELS


def jurisdiction_label(code: str) -> str:
    return JURISDICTION_LABELS.get(code, code)


def collect_findings(record: CRAInput, config: CRAEngineConfig, decision: OverrideDecision) -> list[str]:
    findings = []

    if decision.overridden:
        findings.append(f"Override: {decision.override_applied} → score {decision.final_score}")

    if record.sanction_match is True:
        findings.append("Direct Sanctions List match")

    if (record.pep_count or 0) > 0:
        findings.append(f"{record.pep_count} PEP associations found")

    country = resolve_country_code(record)
    if country and country in config.prohibited_countries:
        findings.append("Geography - Prohibited country")

    if country and country != config.reference_jurisdiction:
        findings.append(f"Non-{jurisdiction_label(config.reference_jurisdiction)} jurisdiction")

    return findings
