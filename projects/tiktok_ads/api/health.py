"""Health check do módulo TikTok Ads."""

from typing import Optional

from fastapi import APIRouter, Depends

from shared.core.logging import get_logger
from projects.tiktok_ads.api.dependencies import get_services
from projects.tiktok_ads.factory import TikTokAdsServices
from projects.tiktok_ads.services.token_store import TokenStore

logger = get_logger(__name__)

MODULE_VERSION = "1.1.0"

router = APIRouter()


async def _check_stored_token(token_store: TokenStore) -> Optional[bool]:
    """True/False se há token guardado; None se o store não respondeu."""
    try:
        return await token_store.load() is not None
    except Exception as e:
        logger.error("Erro ao consultar token store", error=str(e))
        return None


@router.get("/health")
async def health(services: TikTokAdsServices = Depends(get_services)):
    """Health check simples para load balancers (sem auth)."""
    config = services.oauth.settings
    config_ok = bool(config.tiktok_client_id and config.tiktok_client_secret)

    token_present = None
    store_ok = True
    if services.token_store is not None:
        token_present = await _check_stored_token(services.token_store)
        store_ok = token_present is not None

    return {
        "status": "ok" if config_ok and store_ok else "degraded",
        "module": "tiktok-ads",
        "version": MODULE_VERSION,
        "config_present": config_ok,
        "token_store": services.token_store is not None,
        "token_present": token_present,
    }
