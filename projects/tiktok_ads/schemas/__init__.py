"""Schemas Pydantic do módulo TikTok Ads."""
from projects.tiktok_ads.schemas.campaigns import (
    CampaignCreateParams,
    CampaignCreateRequest,
    CampaignStatus,
)
from projects.tiktok_ads.schemas.oauth import AuthUrlResponse, TokenPair
from projects.tiktok_ads.schemas.reports import ReportRequest

__all__ = [
    "AuthUrlResponse",
    "CampaignCreateParams",
    "CampaignCreateRequest",
    "CampaignStatus",
    "ReportRequest",
    "TokenPair",
]
