"""
Scorecard store — per-pillar lookup tables mapping classification codes to 1-5.

Tables are read from `<scorecards_dir>/<pillar>.json`. Entries whose value is
not a number in [1, 5] are dropped; a missing or unreadable file is an empty
table. The process-wide instance is built once on first use and never
changes afterwards (`clear_scorecard_cache` exists for tests and reloads).
"""

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from logger import get_logger
from config import get_config
from models import Pillar

logger = get_logger(__name__)

Scorecard = Mapping[str, float]


def _filter_entries(raw) -> dict[str, float]:
    """Keep only code -> number entries with the number inside [1, 5]."""
    if not isinstance(raw, dict):
        return {}
    table = {}
    for code, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if 1 <= value <= 5:
            table[str(code)] = value
    return table


@dataclass(frozen=True)
class Scorecards:
    """Read-only view of the five pillar scorecards."""

    geography: Scorecard
    industry: Scorecard
    entity: Scorecard
    product: Scorecard
    delivery: Scorecard

    def get(self, pillar: Union[Pillar, str]) -> Scorecard:
        return getattr(self, Pillar(pillar).value)

    @classmethod
    def from_tables(cls, tables: Mapping[str, dict]) -> "Scorecards":
        """Build from in-memory tables keyed by pillar name; missing pillars are empty."""
        return cls(**{
            pillar.value: MappingProxyType(_filter_entries(tables.get(pillar.value, {})))
            for pillar in Pillar
        })

    @classmethod
    def empty(cls) -> "Scorecards":
        return cls.from_tables({})


def load_scorecard(path: Path) -> dict[str, float]:
    """Load one scorecard file. Never raises; bad data yields an empty table."""
    if not path.exists():
        logger.debug(f"Scorecard not found, using empty table: {path}")
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read scorecard {path}: {e}")
        return {}
    table = _filter_entries(raw)
    dropped = len(raw) - len(table) if isinstance(raw, dict) else 0
    if dropped:
        logger.debug(f"Dropped {dropped} out-of-range entries from {path.name}")
    return table


def build_scorecards(directory: Union[str, Path]) -> Scorecards:
    """Load all five pillar tables from a directory."""
    directory = Path(directory)
    tables = {pillar.value: load_scorecard(directory / f"{pillar.value}.json") for pillar in Pillar}
    logger.info(
        "Loaded scorecards from %s (%s)",
        directory,
        ", ".join(f"{name}={len(table)}" for name, table in tables.items()),
    )
    return Scorecards.from_tables(tables)


# Process-wide cache, built at most once
_scorecards: Optional[Scorecards] = None
_scorecards_lock = threading.Lock()


def get_scorecards() -> Scorecards:
    """Return the shared scorecards, building them on first use."""
    global _scorecards
    cached = _scorecards
    if cached is not None:
        return cached
    with _scorecards_lock:
        if _scorecards is None:
            _scorecards = build_scorecards(get_config().scorecards_dir)
        return _scorecards


def clear_scorecard_cache():
    """Drop the shared scorecards so the next access reloads them."""
    global _scorecards
    with _scorecards_lock:
        _scorecards = None
