"""
Async client for the CRA HTTP service.

Wraps POST /cra/calculate, POST /cra/simulate and GET /health with httpx.
Request timeouts are applied here; the engine itself has none.
"""

from typing import Any, Optional, Union

import httpx

from logger import get_logger
from config import get_config
from models import CRAEngineConfig, CRAInput, CRAOutput, SimulationReport

logger = get_logger(__name__)


def _dump_input(record: Union[CRAInput, dict]) -> dict:
    if isinstance(record, CRAInput):
        return record.model_dump(mode="json", exclude_none=True)
    return record


class CRAApiClient:
    """Talks to a running CRA service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.api_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def check_health(self) -> bool:
        """True when GET /health answers 2xx. Never raises."""
        try:
            async with self._client() as client:
                response = await client.get("/health")
                return response.is_success
        except httpx.HTTPError as e:
            logger.debug(f"CRA health check failed: {e}")
            return False

    async def _post(self, path: str, payload: dict) -> Any:
        async with self._client() as client:
            response = await client.post(path, json=payload)

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("message") if isinstance(body, dict) else None
            message = message or response.reason_phrase or "CRA API request failed"
            logger.warning(f"CRA API {path} returned {response.status_code}: {message}")
            raise RuntimeError(message)

        return response.json()

    async def calculate(
        self,
        record: Union[CRAInput, dict],
        config: Optional[CRAEngineConfig] = None,
    ) -> CRAOutput:
        payload = {"input": _dump_input(record)}
        if config is not None:
            payload["config"] = config.to_dict()
        return CRAOutput.model_validate(await self._post("/cra/calculate", payload))

    async def simulate(
        self,
        records: list,
        config: Optional[CRAEngineConfig] = None,
    ) -> SimulationReport:
        payload = {"records": [_dump_input(r) for r in records]}
        if config is not None:
            payload["config"] = config.to_dict()
        return SimulationReport.model_validate(await self._post("/cra/simulate", payload))
