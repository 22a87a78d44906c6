"""
Dispatch tables for pillar scoring and override condition routing.

Replaces if/elif chains in the engine with data-driven lookups.
"""

from models import Pillar, OverrideConditionType
from engine.component_scoring import (
    score_geography, score_industry, score_entity, score_product, score_delivery,
)
from engine.conditions import (
    is_geography_prohibited, has_sanctions_hit, has_pep_or_adverse_media,
    looks_like_shell_company, is_cbd_industry, is_crypto_industry,
    has_bearer_shares, is_adult_entertainment,
)

# =============================================================================
# Pillar Dispatch
# =============================================================================
# Maps config key -> (pillar, scorer)
#   pillar: which scorecard table the scorer reads
#   scorer: callable(record, default, scorecard) -> 1..5

PILLAR_SCORERS = {
    "geo": (Pillar.GEOGRAPHY, score_geography),
    "ind": (Pillar.INDUSTRY, score_industry),
    "ent": (Pillar.ENTITY, score_entity),
    "prod": (Pillar.PRODUCT, score_product),
    "deliv": (Pillar.DELIVERY, score_delivery),
}


# =============================================================================
# Override Condition Dispatch
# =============================================================================
# Maps conditionType -> predicate(record, config) -> bool.
# Condition types missing from this table never match.

CONDITION_EVALUATORS = {
    OverrideConditionType.GEOGRAPHY_PROHIBITED.value: is_geography_prohibited,
    OverrideConditionType.SANCTIONS.value: has_sanctions_hit,
    OverrideConditionType.PEP_AM.value: has_pep_or_adverse_media,
    OverrideConditionType.SHELL_COMPANY.value: looks_like_shell_company,
    OverrideConditionType.INDUSTRY_CBD.value: is_cbd_industry,
    OverrideConditionType.INDUSTRY_CRYPTO.value: is_crypto_industry,
    OverrideConditionType.BEARER_SHARES.value: has_bearer_shares,
    OverrideConditionType.ADULT_ENTERTAINMENT.value: is_adult_entertainment,
}
