"""Router do módulo TikTok Ads."""

from fastapi import APIRouter

from projects.tiktok_ads.api import campaigns, health, oauth, reports

tiktok_ads_router = APIRouter()

tiktok_ads_router.include_router(health.router, tags=["Health"])
tiktok_ads_router.include_router(oauth.router, prefix="/auth", tags=["OAuth"])
tiktok_ads_router.include_router(campaigns.router, tags=["Campaigns"])
tiktok_ads_router.include_router(reports.router, tags=["Reports"])
