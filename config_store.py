"""
Config store for the CRA engine.

Persists a CRAEngineConfig as JSON on disk. Loading merges whatever is stored
with the engine defaults, so partial or older files stay usable.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from logger import get_logger
from config import get_config
from models import CRAEngineConfig
from engine.defaults import default_engine_config, merge_with_defaults

logger = get_logger(__name__)


class CRAConfigStore:
    """JSON-file persistence for the engine configuration."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or get_config().engine_config_path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> CRAEngineConfig:
        """Stored config merged with defaults; defaults if nothing usable is stored."""
        if not self.path.exists():
            return default_engine_config()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            config = merge_with_defaults(data)
            logger.debug(f"Loaded engine config from {self.path}")
            return config
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Could not load engine config from {self.path}, using defaults: {e}")
            return default_engine_config()

    def save(self, config: CRAEngineConfig):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved engine config to {self.path}")

    def reset(self):
        """Remove the stored config so defaults apply again."""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Removed stored engine config {self.path}")


def load_engine_config(path: Optional[Union[str, Path]] = None) -> CRAEngineConfig:
    """Load the engine config from the configured (or given) store path."""
    return CRAConfigStore(path).load()
