"""
Cliente HTTP base para a TikTok Business API.

Toda resposta vem no envelope {code, message, data, request_id}; code != 0
indica erro mesmo com HTTP 200. Não há retry nesta camada: falhas sobem como
TikTokAPIError e quem chama decide o que fazer.
"""

import time
from typing import Any, Optional

import httpx

from shared.core.logging import get_logger
from shared.observability.metrics import UpstreamMetrics
from projects.tiktok_ads.config import tiktok_settings
from projects.tiktok_ads.exceptions import TikTokAPIError

logger = get_logger(__name__)

# Código de sucesso do envelope
SUCCESS_CODE = 0


class TikTokBusinessClient:
    """Cliente assíncrono para a TikTok Business API."""

    MAX_CONNECTIONS = 10
    MAX_KEEPALIVE = 5

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        metrics: Optional[UpstreamMetrics] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or tiktok_settings.tiktok_api_base_url).rstrip("/")
        self.timeout = timeout or tiktok_settings.tiktok_request_timeout
        self.metrics = metrics
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(
                    max_connections=self.MAX_CONNECTIONS,
                    max_keepalive_connections=self.MAX_KEEPALIVE,
                ),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _observe(self, endpoint: str, outcome: str, started: float) -> None:
        if self.metrics is not None:
            self.metrics.observe(endpoint, outcome, time.monotonic() - started)

    @staticmethod
    def _parse_error(response_data: dict, status_code: int) -> TikTokAPIError:
        """Monta TikTokAPIError a partir do envelope de resposta."""
        return TikTokAPIError(
            response_data.get("message") or f"HTTP {status_code}",
            code=response_data.get("code", 0) or 0,
            request_id=response_data.get("request_id", ""),
            status_code=status_code,
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Executa uma chamada e devolve o envelope completo."""
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {"Content-Type": "application/json"}
        if access_token:
            headers["Access-Token"] = access_token

        client = await self._get_client()
        started = time.monotonic()

        logger.debug("TikTok API request", method=method, endpoint=endpoint)

        try:
            response = await client.request(
                method, url, json=json, params=params, headers=headers
            )
        except httpx.TimeoutException as e:
            self._observe(endpoint, "timeout", started)
            logger.warning("TikTok API timeout", endpoint=endpoint, timeout=self.timeout)
            raise TikTokAPIError(f"Timeout: {e}", code=-1) from e
        except httpx.HTTPError as e:
            self._observe(endpoint, "transport_error", started)
            logger.warning("TikTok API erro de transporte", endpoint=endpoint, error=str(e))
            raise TikTokAPIError(f"HTTP error: {e}", code=-2) from e

        try:
            response_data = response.json()
        except ValueError:
            response_data = {}

        if not isinstance(response_data, dict):
            response_data = {}

        if response.status_code >= 400 or response_data.get("code", SUCCESS_CODE) != SUCCESS_CODE:
            error = self._parse_error(response_data, response.status_code)
            self._observe(endpoint, "api_error", started)
            logger.warning(
                "TikTok API error",
                endpoint=endpoint,
                status=response.status_code,
                error_code=error.code,
                request_id=error.request_id,
                message=str(error),
            )
            raise error

        if not response_data:
            self._observe(endpoint, "api_error", started)
            raise TikTokAPIError(
                "Resposta sem corpo JSON", status_code=response.status_code
            )

        self._observe(endpoint, "success", started)
        return response_data

    async def get(
        self,
        endpoint: str,
        params: Optional[dict] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """GET request."""
        return await self.request("GET", endpoint, params=params, access_token=access_token)

    async def post(
        self,
        endpoint: str,
        json: Optional[dict] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """POST request."""
        return await self.request("POST", endpoint, json=json, access_token=access_token)
