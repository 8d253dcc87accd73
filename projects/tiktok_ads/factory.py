"""Montagem dos serviços do módulo (usada pela API e pelo worker)."""

from dataclasses import dataclass
from typing import Optional

from shared.config import settings
from shared.observability.metrics import UpstreamMetrics
from projects.tiktok_ads.client.base import TikTokBusinessClient
from projects.tiktok_ads.client.campaigns import CampaignsClient
from projects.tiktok_ads.client.reports import ReportsClient
from projects.tiktok_ads.config import TikTokAdsSettings, tiktok_settings
from projects.tiktok_ads.services.oauth_service import OAuthService
from projects.tiktok_ads.services.refresh_scheduler import (
    CeleryRefreshScheduler,
    RefreshScheduler,
)
from projects.tiktok_ads.services.token_store import RedisTokenStore


@dataclass
class TikTokAdsServices:
    api_client: TikTokBusinessClient
    oauth: OAuthService
    campaigns: CampaignsClient
    reports: ReportsClient
    token_store: Optional[RedisTokenStore] = None

    async def aclose(self) -> None:
        await self.api_client.close()
        if self.token_store is not None:
            await self.token_store.close()


def build_services(
    metrics: Optional[UpstreamMetrics] = None,
    scheduler: Optional[RefreshScheduler] = None,
    api_client: Optional[TikTokBusinessClient] = None,
    config: Optional[TikTokAdsSettings] = None,
) -> TikTokAdsServices:
    """Cria cliente HTTP compartilhado, OAuthService e clientes de campanha/relatório."""
    config = config or tiktok_settings
    api_client = api_client or TikTokBusinessClient(
        base_url=config.tiktok_api_base_url,
        timeout=config.tiktok_request_timeout,
        metrics=metrics,
    )

    token_store = None
    if config.token_store_enabled:
        token_store = RedisTokenStore.from_url(
            config.tiktok_token_store_url or settings.redis_url,
            config.tiktok_token_encryption_key,
        )

    return TikTokAdsServices(
        api_client=api_client,
        oauth=OAuthService(
            api_client,
            scheduler or CeleryRefreshScheduler(),
            token_store=token_store,
            settings=config,
        ),
        campaigns=CampaignsClient(api_client, api_version=config.tiktok_api_version),
        reports=ReportsClient(api_client, api_version=config.tiktok_api_version),
        token_store=token_store,
    )
