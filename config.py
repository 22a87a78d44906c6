"""
Configuration management for the Compliance Risk Assessment (CRA) engine.

Loads configuration from environment variables with sensible defaults.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _load_dotenv():
    """Load the .env file next to this module, if present."""
    env_path = Path(__file__).parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)


# Load .env file on module import
_load_dotenv()


# =============================================================================
# Scorecard & Engine Config Locations
# =============================================================================

SCORECARDS_DIR = os.environ.get(
    "CRA_SCORECARDS_DIR",
    str(Path(__file__).parent / "scorecards")
)

ENGINE_CONFIG_PATH = os.environ.get(
    "CRA_ENGINE_CONFIG_PATH",
    str(Path(__file__).parent / "cra_engine_config.json")
)


# =============================================================================
# HTTP Service Defaults
# =============================================================================

DEFAULT_API_PORT = 3233
SERVICE_NAME = "cra-engine"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Scorecards and persisted engine configuration
    scorecards_dir: str = field(default_factory=lambda: os.environ.get("CRA_SCORECARDS_DIR", SCORECARDS_DIR))
    engine_config_path: str = field(default_factory=lambda: os.environ.get("CRA_ENGINE_CONFIG_PATH", ENGINE_CONFIG_PATH))

    # Batch simulation fan-out
    batch_workers: int = field(default_factory=lambda: _env_int("CRA_BATCH_WORKERS", 4))

    # HTTP service
    api_host: str = field(default_factory=lambda: os.environ.get("CRA_API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: _env_int("CRA_API_PORT", DEFAULT_API_PORT))

    # HTTP client
    api_url: str = field(
        default_factory=lambda: os.environ.get("CRA_API_URL", f"http://localhost:{DEFAULT_API_PORT}/api")
    )
    api_timeout: float = field(default_factory=lambda: _env_float("CRA_API_TIMEOUT", 30.0))

    # Logging Configuration
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))
    log_format: str = field(
        default_factory=lambda: os.environ.get(
            "LOG_FORMAT",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )

    # Verbose output (for CLI)
    verbose: bool = field(default_factory=lambda: os.environ.get("VERBOSE", "").lower() in ("true", "1", "yes"))

    def __post_init__(self):
        """Validate configuration after initialization."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            self.log_level = "INFO"
        self.log_level = self.log_level.upper()
        if self.batch_workers < 1:
            self.batch_workers = 1

    def get_log_level(self) -> int:
        """Get the logging level as an integer."""
        return getattr(logging, self.log_level, logging.INFO)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config):
    """Set the global configuration instance."""
    global _config
    _config = config
