"""Cliente para campanhas da TikTok Business API."""

from typing import Any, Optional

from shared.core.logging import get_logger
from projects.tiktok_ads.client.base import TikTokBusinessClient
from projects.tiktok_ads.config import tiktok_settings
from projects.tiktok_ads.exceptions import TikTokAPIError, UpstreamCampaignError
from projects.tiktok_ads.schemas.campaigns import CampaignCreateParams

logger = get_logger(__name__)

# Campos fixos de toda campanha criada por este serviço
CAMPAIGN_DEFAULTS = {
    "budget_mode": "BUDGET_MODE_INFINITE",
    "landing_type": "WEBSITE",
    "objective_type": "CONVERSION",
}


def build_campaign_payload(params: CampaignCreateParams) -> dict[str, Any]:
    """Mescla os campos de quem chama com os defaults fixos."""
    return {
        "advertiser_id": params.advertiser_id,
        "campaign_name": params.campaign_name,
        "budget": params.budget,
        "status": params.status.value,
        **CAMPAIGN_DEFAULTS,
    }


class CampaignsClient:
    """Client para operações com campanhas."""

    def __init__(self, api_client: TikTokBusinessClient, api_version: Optional[str] = None):
        self.client = api_client
        self.api_version = api_version or tiktok_settings.tiktok_api_version

    @property
    def create_endpoint(self) -> str:
        return f"open_api/{self.api_version}/campaign/create/"

    async def create_campaign(
        self, token: str, params: CampaignCreateParams
    ) -> dict[str, Any]:
        """Cria uma campanha e devolve o `data` da resposta."""
        payload = build_campaign_payload(params)
        logger.info(
            "Criando campanha",
            advertiser_id=params.advertiser_id,
            campaign_name=params.campaign_name,
        )

        try:
            response = await self.client.post(
                self.create_endpoint, json=payload, access_token=token
            )
        except TikTokAPIError as e:
            raise UpstreamCampaignError(
                f"Falha ao criar campanha: {e.message}", cause=e
            ) from e

        data = response.get("data") or {}
        logger.info(
            "Campanha criada",
            advertiser_id=params.advertiser_id,
            campaign_id=data.get("campaign_id"),
        )
        return data
