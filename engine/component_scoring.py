"""
Component scorer — resolves a 1-5 score for each of the five pillars.

Each scorer reads its field(s) from the record, looks the normalized key up in
the pillar scorecard and falls back, in order, to the scorecard's own
"default" entry and then to the configured component default.
"""

import re
from typing import Optional

from models import CRAInput
from engine.scorecards import Scorecard

SCORE_MIN = 1
SCORE_MAX = 5

_WHITESPACE = re.compile(r"\s+")


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def normalize_code(value: Optional[str]) -> str:
    """Lower-case a product/channel label and join words with underscores."""
    return _WHITESPACE.sub("_", (value or "").strip().lower())


def resolve_country_code(record: CRAInput) -> str:
    """Country used for geography: country_code, else domicile; '' if neither."""
    for code in (record.country_code, record.domicile):
        code = (code or "").strip().upper()
        if code:
            return code
    return ""


def _lookup(scorecard: Scorecard, key: str) -> Optional[float]:
    value = scorecard.get(key)
    if value is None:
        value = scorecard.get("default")
    return value


def _resolve(scorecard: Scorecard, key: str, default: float) -> float:
    if not key:
        return clamp(default)
    value = _lookup(scorecard, key)
    return clamp(value if value is not None else default)


def score_geography(record: CRAInput, default: float, scorecard: Scorecard) -> float:
    return _resolve(scorecard, resolve_country_code(record), default)


def score_industry(record: CRAInput, default: float, scorecard: Scorecard) -> float:
    """industry_code first, then the first SIC code, then the fallbacks."""
    if record.industry_code is not None:
        value = scorecard.get(record.industry_code.strip())
        if value is not None:
            return clamp(value)
    if record.sic_codes:
        value = scorecard.get(str(record.sic_codes[0]))
        if value is not None:
            return clamp(value)
    fallback = scorecard.get("default")
    return clamp(fallback if fallback is not None else default)


def score_entity(record: CRAInput, default: float, scorecard: Scorecard) -> float:
    return _resolve(scorecard, (record.entity_type or "").strip(), default)


def score_product(record: CRAInput, default: float, scorecard: Scorecard) -> float:
    product_type = record.product_type
    if not product_type and record.product_data is not None:
        product_type = record.product_data.type
    return _resolve(scorecard, normalize_code(product_type), default)


def score_delivery(record: CRAInput, default: float, scorecard: Scorecard) -> float:
    """The most restrictive channel governs."""
    channels = record.delivery_data.channels if record.delivery_data is not None else []
    if not channels:
        return clamp(default)
    return max(_resolve(scorecard, normalize_code(channel), default) for channel in channels)
