"""
CRA engine exports.
"""

from engine.calculator import calculate_cra, score_components
from engine.defaults import default_engine_config, merge_with_defaults
from engine.scorecards import Scorecards, get_scorecards, clear_scorecard_cache, build_scorecards

__all__ = [
    "calculate_cra",
    "score_components",
    "default_engine_config",
    "merge_with_defaults",
    "Scorecards",
    "get_scorecards",
    "clear_scorecard_cache",
    "build_scorecards",
]
