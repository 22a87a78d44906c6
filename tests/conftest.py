"""Pytest configuration and fixtures for CRA engine tests."""

import pytest
import sys
import os
import json

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

TEST_CASES_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "test_cases"
)


def _load_case(name):
    with open(os.path.join(TEST_CASES_DIR, name), "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def reset_config(tmp_path, monkeypatch):
    """Isolate each test: empty scorecards dir, throwaway config store, fresh config."""
    empty_dir = tmp_path / "no_scorecards"
    empty_dir.mkdir()
    monkeypatch.setenv("CRA_SCORECARDS_DIR", str(empty_dir))
    monkeypatch.setenv("CRA_ENGINE_CONFIG_PATH", str(tmp_path / "cra_engine_config.json"))

    import config
    from engine import clear_scorecard_cache
    config._config = None
    clear_scorecard_cache()
    yield
    config._config = None
    clear_scorecard_cache()


@pytest.fixture
def default_config():
    from engine import default_engine_config
    return default_engine_config()


@pytest.fixture
def empty_scorecards():
    from engine import Scorecards
    return Scorecards.empty()


@pytest.fixture
def fixture_scorecards():
    """Scorecards built from test_cases/scorecards (includes malformed entries)."""
    from engine import build_scorecards
    return build_scorecards(os.path.join(TEST_CASES_DIR, "scorecards"))


@pytest.fixture
def record_domestic_low():
    """Harbour Lane Bakery Ltd: GB, branch-only current account."""
    return _load_case("record_domestic_low.json")


@pytest.fixture
def record_offshore_pep():
    """Global Horizon Holdings: BVI trust with two PEP associations."""
    return _load_case("record_offshore_pep.json")


@pytest.fixture
def record_prohibited():
    """Caspian Trade House: Iranian domicile, lower-case country code."""
    return _load_case("record_prohibited.json")


@pytest.fixture
def batch_mixed():
    """Four entries, one of which is not an object."""
    return _load_case("batch_mixed.json")


@pytest.fixture
def config_partial():
    return _load_case("config_partial.json")
