"""Dependências FastAPI do módulo TikTok Ads.

Tudo sai de app.state, preenchido por create_app().
"""

from fastapi import Depends, Request

from shared.observability import ErrorReporter
from projects.tiktok_ads.client.campaigns import CampaignsClient
from projects.tiktok_ads.client.reports import ReportsClient
from projects.tiktok_ads.factory import TikTokAdsServices
from projects.tiktok_ads.services.oauth_service import OAuthService


def get_services(request: Request) -> TikTokAdsServices:
    return request.app.state.tiktok_ads


def get_error_reporter(request: Request) -> ErrorReporter:
    return request.app.state.observability.error_reporter


def get_oauth_service(services: TikTokAdsServices = Depends(get_services)) -> OAuthService:
    return services.oauth


def get_campaigns_client(services: TikTokAdsServices = Depends(get_services)) -> CampaignsClient:
    return services.campaigns


def get_reports_client(services: TikTokAdsServices = Depends(get_services)) -> ReportsClient:
    return services.reports
