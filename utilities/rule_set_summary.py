"""
Rule-set summary — describes an engine configuration in plain language.

Used by the CLI (--summary) and the service (GET /cra/summary) so reviewers
can read what a config does without reading JSON.
"""

from models import (
    CRAEngineConfig, OverrideSummary, RuleSetSummary, RuleSetSummaryConcise, PILLAR_KEYS,
)
from engine.overrides import sorted_rules
from engine.weighting import normalize_weights, round_half_up
from utilities.reference_data import CONDITION_LABELS, PILLAR_LABELS

INTRO = (
    "Your risk score (1–5) is computed from five factors (Geography, Industry, Entity, "
    "Product, Delivery) using your chosen weights. Overrides are applied in priority order; "
    "the first match sets the score. The score is then mapped to a risk band."
)

GEOGRAPHY_FIRST = (
    "We first check if the entity is in a prohibited country; if yes, score = 5 and we stop. "
    "Otherwise we apply the override rules below in order (first match wins)."
)


def condition_label(condition_type: str) -> str:
    return CONDITION_LABELS.get(condition_type, condition_type.replace("_", " "))


def _weight_percentages(config: CRAEngineConfig) -> dict[str, int]:
    normalized = normalize_weights(config.weights)
    return {key: round_half_up(normalized[key] * 100) for key in PILLAR_KEYS}


def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def get_rule_set_summary(config: CRAEngineConfig) -> RuleSetSummary:
    percentages = _weight_percentages(config)
    weights = ", ".join(f"{PILLAR_LABELS[key]} {percentages[key]}%" for key in PILLAR_KEYS)
    defaults = ", ".join(
        f"{PILLAR_LABELS[key]} {getattr(config.component_defaults, key)}" for key in PILLAR_KEYS
    )

    overrides = [
        OverrideSummary(
            priority=rule.priority,
            name=rule.name,
            condition_label=condition_label(rule.condition_type),
            result_score=rule.result_score,
        )
        for rule in sorted_rules(config.override_rules)
    ]

    if config.risk_bands:
        bands = ", ".join(
            f"{band.name} ({_format_bound(band.min)}–{_format_bound(band.max)})"
            for band in sorted(config.risk_bands, key=lambda b: b.min)
        )
    else:
        bands = "No risk bands configured."

    return RuleSetSummary(
        intro=INTRO,
        weights=f"{weights}. Default score per factor when not found: {defaults}.",
        geography_first=GEOGRAPHY_FIRST,
        overrides=overrides,
        risk_bands=bands,
        prohibited_countries=", ".join(config.prohibited_countries) or "None",
    )


def get_rule_set_summary_concise(config: CRAEngineConfig) -> RuleSetSummaryConcise:
    percentages = _weight_percentages(config)
    short = {"geo": "Geo", "ind": "Ind", "ent": "Ent", "prod": "Prod", "deliv": "Del"}
    count = len(config.override_rules)
    return RuleSetSummaryConcise(
        weights=" ".join(f"{short[key]} {percentages[key]}%" for key in PILLAR_KEYS),
        overrides=f"{count} override{'s' if count != 1 else ''}" if count else "No overrides",
        prohibited=", ".join(config.prohibited_countries) or "None",
    )
