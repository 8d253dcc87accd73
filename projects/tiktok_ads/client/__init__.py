"""Clientes da TikTok Business API."""
from projects.tiktok_ads.client.base import TikTokBusinessClient
from projects.tiktok_ads.client.campaigns import CampaignsClient
from projects.tiktok_ads.client.reports import ReportsClient

__all__ = ["TikTokBusinessClient", "CampaignsClient", "ReportsClient"]
