"""
CRA HTTP service (FastAPI).

    POST /cra/calculate  { input: CRAInput, config?: CRAEngineConfig } -> CRAOutput
    POST /cra/simulate   { records: CRAInput[], config?: CRAEngineConfig } -> SimulationReport
    GET  /cra/summary    -> RuleSetSummary of the stored config (?concise=true for one-liners)
    GET  /health         -> { status: "ok" }

Every route is also served under /api. When `config` is omitted the stored
config (or the engine defaults) is used.

Run:
    python main.py --serve
    uvicorn server:app --port 3233
"""

from typing import Any, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from logger import get_logger
from config import get_config, SERVICE_NAME
from models import CRAEngineConfig
from config_store import load_engine_config
from engine import calculate_cra, merge_with_defaults
from simulation import run_simulation
from utilities.rule_set_summary import get_rule_set_summary, get_rule_set_summary_concise

logger = get_logger(__name__)

router = APIRouter()


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _resolve_config(raw: Any) -> CRAEngineConfig:
    """Request config merged with defaults, or the stored config when absent."""
    if raw is None:
        return load_engine_config()
    return merge_with_defaults(raw)


@router.get("/health", tags=["Health"])
async def health():
    return {"status": "ok", "service": SERVICE_NAME}


@router.post("/cra/calculate", tags=["CRA"])
async def calculate(request: Request):
    body = await _read_json(request)
    record = body.get("input") if isinstance(body, dict) else None
    if not isinstance(record, dict):
        return _error(400, "Bad request", "Body must include { input: CRAInput }")

    try:
        config = await run_in_threadpool(_resolve_config, body.get("config"))
    except ValueError as e:
        return _error(400, "Invalid config", str(e))

    try:
        output = await run_in_threadpool(calculate_cra, record, config)
    except Exception as e:
        logger.exception("CRA calculation failed")
        return _error(500, "Internal server error", str(e) or "CRA calculation failed")

    return output.to_dict()


@router.post("/cra/simulate", tags=["CRA"])
async def simulate(request: Request):
    body = await _read_json(request)
    records = body.get("records") if isinstance(body, dict) else None
    if not isinstance(records, list):
        return _error(400, "Bad request", "Body must include { records: CRAInput[] }")

    try:
        config = await run_in_threadpool(_resolve_config, body.get("config"))
    except ValueError as e:
        return _error(400, "Invalid config", str(e))

    try:
        report = await run_in_threadpool(run_simulation, records, config)
    except Exception as e:
        logger.exception("CRA simulation failed")
        return _error(500, "Internal server error", str(e) or "CRA simulation failed")

    return report.to_dict()


@router.get("/cra/summary", tags=["CRA"])
async def summary(concise: bool = False):
    config = await run_in_threadpool(load_engine_config)
    if concise:
        return get_rule_set_summary_concise(config).model_dump()
    return get_rule_set_summary(config).model_dump()


def create_app() -> FastAPI:
    app = FastAPI(
        title="CRA Engine",
        description="Compliance Risk Assessment scoring service",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.include_router(router, prefix="/api")
    return app


app = create_app()


def serve(host: Optional[str] = None, port: Optional[int] = None):
    """Run the service with uvicorn (blocking)."""
    config = get_config()
    host = host or config.api_host
    port = port or config.api_port
    logger.info(f"CRA API listening on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
