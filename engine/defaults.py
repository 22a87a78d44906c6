"""
Default engine configuration and the merge-with-defaults boundary step.

Configs edited in a UI or stored on disk are often partial. Every boundary
(HTTP body, CLI file, config store) passes them through `merge_with_defaults`
so the engine always receives a complete, validated `CRAEngineConfig`.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional, Union

from models import CRAEngineConfig
from utilities.reference_data import (
    DEFAULT_WEIGHTS, DEFAULT_COMPONENT_SCORES, DEFAULT_OVERRIDE_RULES,
    DEFAULT_RISK_BANDS, FATF_CALL_FOR_ACTION, DEFAULT_REFERENCE_JURISDICTION,
)


@lru_cache(maxsize=1)
def default_engine_config() -> CRAEngineConfig:
    """The built-in configuration (frozen, shared)."""
    return CRAEngineConfig.model_validate({
        "weights": DEFAULT_WEIGHTS,
        "componentDefaults": DEFAULT_COMPONENT_SCORES,
        "overrideRules": DEFAULT_OVERRIDE_RULES,
        "riskBands": DEFAULT_RISK_BANDS,
        "prohibitedCountries": FATF_CALL_FOR_ACTION,
        "referenceJurisdiction": DEFAULT_REFERENCE_JURISDICTION,
    })


def _pick(data: Mapping, *keys: str) -> Any:
    """First present, non-None value among camelCase/snake_case spellings."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _merge_pillars(defaults: dict, overrides: Any) -> dict:
    merged = dict(defaults)
    if isinstance(overrides, Mapping):
        merged.update({k: v for k, v in overrides.items() if k in defaults and v is not None})
    return merged


def merge_with_defaults(partial: Union[CRAEngineConfig, Mapping, None]) -> CRAEngineConfig:
    """
    Complete a partial config with engine defaults and validate it.

    - weights / componentDefaults: merged key by key
    - overrideRules: replaced when given as a list (an empty list disables overrides)
    - riskBands: replaced only when a non-empty list is given
    - prohibitedCountries: replaced when given as a list
    - referenceJurisdiction: replaced when a non-empty string is given

    Raises ValueError when `partial` is not an object and pydantic's
    ValidationError when a supplied value is invalid.
    """
    if isinstance(partial, CRAEngineConfig):
        return partial
    if partial is None:
        return default_engine_config()
    if not isinstance(partial, Mapping):
        raise ValueError(f"CRA engine config must be a JSON object, got {type(partial).__name__}")

    base = default_engine_config().to_dict()

    override_rules: Optional[Any] = _pick(partial, "overrideRules", "override_rules")
    risk_bands = _pick(partial, "riskBands", "risk_bands")
    prohibited = _pick(partial, "prohibitedCountries", "prohibited_countries")
    reference = _pick(partial, "referenceJurisdiction", "reference_jurisdiction")

    return CRAEngineConfig.model_validate({
        "weights": _merge_pillars(base["weights"], partial.get("weights")),
        "componentDefaults": _merge_pillars(
            base["componentDefaults"], _pick(partial, "componentDefaults", "component_defaults")
        ),
        "overrideRules": override_rules if isinstance(override_rules, list) else base["overrideRules"],
        "riskBands": risk_bands if isinstance(risk_bands, list) and risk_bands else base["riskBands"],
        "prohibitedCountries": prohibited if isinstance(prohibited, list) else base["prohibitedCountries"],
        "referenceJurisdiction": reference if isinstance(reference, str) and reference.strip()
        else base["referenceJurisdiction"],
    })
