"""Risk band mapper — final score to a named band."""

from typing import Iterable

from models import RiskBand

UNKNOWN_BAND = "Unknown"


def map_risk_band(score: float, bands: Iterable[RiskBand]) -> str:
    """
    First band (sorted by min) whose inclusive range contains the score.

    A score that falls in a gap gets the last band in sorted order; with no
    bands configured the result is "Unknown".
    """
    ordered = sorted(bands, key=lambda band: band.min)
    for band in ordered:
        if band.contains(score):
            return band.name
    return ordered[-1].name if ordered else UNKNOWN_BAND
