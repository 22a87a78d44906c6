"""
Batch simulation — scores many records against one engine config.

Records have no dependency on each other, so they are fanned out over a
thread pool. Output order always matches input order. A record that cannot
be scored becomes a SimulationError and the rest of the batch continues.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Sequence

from logger import get_logger
from config import get_config
from models import CRAEngineConfig, CRAOutput, SimulationError, SimulationReport
from engine import calculate_cra, default_engine_config, get_scorecards
from engine.scorecards import Scorecards
from simulation_metrics import build_batch_summary

logger = get_logger(__name__)


def _score_record(
    index: int,
    record: Any,
    config: CRAEngineConfig,
    scorecards: Scorecards,
) -> tuple[Optional[CRAOutput], Optional[SimulationError]]:
    try:
        return calculate_cra(record, config, scorecards), None
    except ValueError as e:
        return None, SimulationError(index=index, message=str(e))
    except Exception as e:
        logger.exception(f"Unexpected failure scoring record {index}")
        return None, SimulationError(index=index, message=f"Internal error: {e}")


def run_simulation(
    records: Sequence[Any],
    config: Optional[CRAEngineConfig] = None,
    max_workers: Optional[int] = None,
    scorecards: Optional[Scorecards] = None,
) -> SimulationReport:
    """
    Score a batch of records.

    Args:
        records: List of CRAInput objects or decoded JSON objects
        config: Engine config (defaults when omitted)
        max_workers: Thread pool size (CRA_BATCH_WORKERS when omitted)
        scorecards: Scorecard tables (the shared store when omitted)

    Returns:
        SimulationReport with results in input order, errors and summary

    Raises:
        ValueError: if `records` is not a list
    """
    if not isinstance(records, (list, tuple)):
        raise ValueError(f"Simulation records must be a JSON array, got {type(records).__name__}")

    if config is None:
        config = default_engine_config()
    # Build the shared store once, before any worker touches it
    if scorecards is None:
        scorecards = get_scorecards()
    workers = max_workers or get_config().batch_workers

    logger.info(f"Simulating {len(records)} records on {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(
            lambda item: _score_record(item[0], item[1], config, scorecards),
            enumerate(records),
        ))

    results = [output for output, _ in outcomes if output is not None]
    errors = [err for _, err in outcomes if err is not None]
    if errors:
        logger.warning(f"{len(errors)} of {len(records)} records could not be scored")

    return SimulationReport(
        results=results,
        errors=errors,
        summary=build_batch_summary(results, len(records), len(errors)),
    )
