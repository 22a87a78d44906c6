"""
Weight normalizer — turns the five pillar weights into a composite score.

Weights are scaled to sum to 1 (equal weights when they sum to 0). The
weighted mean is rounded half-up and clamped to [1, 5]; that integer is the
pre-override score every later stage consumes.
"""

from decimal import Decimal, ROUND_HALF_UP

from models import CRAWeights, ComponentScores, PILLAR_KEYS
from engine.component_scoring import clamp

EQUAL_WEIGHT = 1 / len(PILLAR_KEYS)

# Places kept before rounding, enough to strip binary float noise
_NOISE_PLACES = 9


def normalize_weights(weights: CRAWeights) -> dict[str, float]:
    """Scale weights to sum to 1, keyed by pillar key (geo, ind, ...)."""
    raw = {key: getattr(weights, key) for key in PILLAR_KEYS}
    largest = max(raw.values())
    if largest <= 0:
        return {key: EQUAL_WEIGHT for key in PILLAR_KEYS}
    # Divide by the largest first so the sum stays finite for huge weights
    scaled = {key: value / largest for key, value in raw.items()}
    total = sum(scaled.values())
    return {key: value / total for key, value in scaled.items()}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, 3.65 -> 4)."""
    trimmed = Decimal(str(round(value, _NOISE_PLACES)))
    return int(trimmed.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weighted_mean(scores: ComponentScores, weights: CRAWeights) -> float:
    normalized = normalize_weights(weights)
    return sum(normalized[key] * getattr(scores, key) for key in PILLAR_KEYS)


def composite_score(scores: ComponentScores, weights: CRAWeights) -> int:
    """Rounded, clamped pre-override score."""
    return int(clamp(round_half_up(weighted_mean(scores, weights))))
