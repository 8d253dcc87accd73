"""Cliente para o relatório integrado da TikTok Business API."""

from typing import Any, Optional

from shared.core.logging import get_logger
from projects.tiktok_ads.client.base import TikTokBusinessClient
from projects.tiktok_ads.config import tiktok_settings
from projects.tiktok_ads.exceptions import TikTokAPIError, UpstreamReportError

logger = get_logger(__name__)

REPORT_TYPE = "BASIC"
DATA_LEVEL = "AUCTION_AD"
REPORT_DIMENSIONS = ["campaign_id"]
REPORT_METRICS = ["impressions", "click", "convert"]


class ReportsClient:
    """Client para relatórios de performance por campanha."""

    def __init__(self, api_client: TikTokBusinessClient, api_version: Optional[str] = None):
        self.client = api_client
        self.api_version = api_version or tiktok_settings.tiktok_api_version

    @property
    def report_endpoint(self) -> str:
        return f"open_api/{self.api_version}/report/integrated/get/"

    async def fetch_stats(
        self,
        token: str,
        advertiser_id: str,
        campaign_ids: list[str],
        start_date: str,
        end_date: str,
    ) -> list[dict[str, Any]]:
        """Busca impressões, cliques e conversões por campanha no período.

        As linhas são devolvidas exatamente como vieram da API.
        """
        payload = {
            "advertiser_id": advertiser_id,
            "report_type": REPORT_TYPE,
            "data_level": DATA_LEVEL,
            "dimensions": REPORT_DIMENSIONS,
            "metrics": REPORT_METRICS,
            "start_date": start_date,
            "end_date": end_date,
            "campaign_ids": campaign_ids,
        }
        logger.info(
            "Buscando relatório",
            advertiser_id=advertiser_id,
            campaigns=len(campaign_ids),
            start_date=start_date,
            end_date=end_date,
        )

        try:
            response = await self.client.post(
                self.report_endpoint, json=payload, access_token=token
            )
        except TikTokAPIError as e:
            raise UpstreamReportError(
                f"Falha ao buscar relatório: {e.message}", cause=e
            ) from e

        rows = (response.get("data") or {}).get("list") or []
        logger.info("Relatório obtido", count=len(rows))
        return rows
