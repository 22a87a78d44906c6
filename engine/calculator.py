"""
CRA engine facade.

calculate_cra(input, config) -> CRAOutput

    record -> component scores (x5) -> weighted composite (pre-override)
           -> override evaluation (final) -> risk band
           -> findings

Pure and synchronous: the only shared state touched is the lazily-built
scorecard store.
"""

from collections.abc import Mapping
from typing import Optional, Union

import dispatch
from logger import get_logger
from models import CRAInput, CRAOutput, CRAEngineConfig, ComponentDefaults, ComponentScores
from engine.defaults import default_engine_config
from engine.findings import collect_findings
from engine.overrides import evaluate_overrides
from engine.risk_bands import map_risk_band
from engine.scorecards import Scorecards, get_scorecards
from engine.weighting import composite_score

logger = get_logger(__name__)

UNKNOWN_RECORD_ID = "unknown"
UNKNOWN_ENTITY_NAME = "Unknown Entity"


def score_components(
    record: CRAInput,
    defaults: ComponentDefaults,
    scorecards: Scorecards,
) -> ComponentScores:
    """Resolve all five pillar scores."""
    scores = {}
    for key, (pillar, scorer) in dispatch.PILLAR_SCORERS.items():
        scores[key] = scorer(record, getattr(defaults, key), scorecards.get(pillar))
    return ComponentScores(**scores)


def calculate_cra(
    record: Union[CRAInput, Mapping],
    config: Optional[CRAEngineConfig] = None,
    scorecards: Optional[Scorecards] = None,
) -> CRAOutput:
    """
    Score one record.

    Args:
        record: CRAInput or a decoded JSON object
        config: Complete engine config (defaults when omitted)
        scorecards: Scorecard tables (the shared store when omitted)

    Returns:
        CRAOutput with pre-override and final scores, band and findings

    Raises:
        ValueError: if `record` is not an object
    """
    record = CRAInput.from_payload(record)
    if config is None:
        config = default_engine_config()
    if scorecards is None:
        scorecards = get_scorecards()

    components = score_components(record, config.component_defaults, scorecards)
    pre_override = composite_score(components, config.weights)
    decision = evaluate_overrides(record, config, pre_override)
    risk_band = map_risk_band(decision.final_score, config.risk_bands)
    findings = collect_findings(record, config, decision)

    record_id = record.record_id if record.record_id is not None else UNKNOWN_RECORD_ID
    logger.debug(
        f"CRA {record_id}: components={components.model_dump()} pre={pre_override} "
        f"final={decision.final_score} override={decision.override_applied!r} band={risk_band!r}"
    )

    return CRAOutput(
        record_id=record_id,
        entity_name=record.entity_name if record.entity_name is not None else UNKNOWN_ENTITY_NAME,
        final_score=decision.final_score,
        risk_band=risk_band,
        pre_override_score=pre_override,
        override_applied=decision.override_applied,
        findings=findings,
    )
