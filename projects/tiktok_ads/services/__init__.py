"""Serviços do módulo TikTok Ads."""
from projects.tiktok_ads.services.oauth_service import OAuthService
from projects.tiktok_ads.services.refresh_scheduler import (
    CeleryRefreshScheduler,
    RefreshScheduler,
    compute_refresh_delay,
)
from projects.tiktok_ads.services.token_store import RedisTokenStore, TokenStore

__all__ = [
    "CeleryRefreshScheduler",
    "OAuthService",
    "RedisTokenStore",
    "RefreshScheduler",
    "TokenStore",
    "compute_refresh_delay",
]
