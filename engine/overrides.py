"""
Override rule evaluator.

Two phases, always in this order:
1. Absolute geography check — a prohibited country (or the explicit flag)
   forces score 5 before any configured rule is looked at.
2. Prioritized rules — configured rules sorted by ascending priority; the
   first whose condition holds sets the final score.

Unknown condition types never match.
"""

from dataclasses import dataclass
from typing import Optional

import dispatch
from logger import get_logger
from models import CRAInput, CRAEngineConfig, OverrideRule
from engine.component_scoring import clamp
from engine.conditions import is_geography_prohibited
from utilities.reference_data import GEOGRAPHY_PROHIBITED_OVERRIDE

logger = get_logger(__name__)

PROHIBITED_SCORE = 5


@dataclass(frozen=True)
class OverrideDecision:
    """Outcome of override evaluation."""
    final_score: int
    override_applied: Optional[str] = None

    @property
    def overridden(self) -> bool:
        return self.override_applied is not None


def rule_matches(rule: OverrideRule, record: CRAInput, config: CRAEngineConfig) -> bool:
    predicate = dispatch.CONDITION_EVALUATORS.get(rule.condition_type)
    if predicate is None:
        logger.debug(f"Override rule {rule.id!r} has unknown condition type {rule.condition_type!r}")
        return False
    return predicate(record, config)


def sorted_rules(rules) -> list[OverrideRule]:
    """Ascending priority; ties keep their configured order."""
    return sorted(rules, key=lambda rule: rule.priority)


def check_absolute_geography(record: CRAInput, config: CRAEngineConfig) -> Optional[OverrideDecision]:
    """Phase 1. Returns a decision only when geography is prohibited."""
    if is_geography_prohibited(record, config):
        return OverrideDecision(final_score=PROHIBITED_SCORE, override_applied=GEOGRAPHY_PROHIBITED_OVERRIDE)
    return None


def apply_priority_rules(record: CRAInput, config: CRAEngineConfig) -> Optional[OverrideDecision]:
    """Phase 2. First matching configured rule, or None."""
    for rule in sorted_rules(config.override_rules):
        if rule_matches(rule, record, config):
            return OverrideDecision(final_score=int(clamp(rule.result_score)), override_applied=rule.name)
    return None


def evaluate_overrides(record: CRAInput, config: CRAEngineConfig, pre_override_score: int) -> OverrideDecision:
    """Run both phases; without a match the pre-override score stands."""
    decision = check_absolute_geography(record, config)
    if decision is None:
        decision = apply_priority_rules(record, config)
    if decision is None:
        return OverrideDecision(final_score=pre_override_score)
    return decision
