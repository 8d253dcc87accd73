"""Fixtures compartilhadas dos testes do módulo TikTok Ads."""

import pytest

from projects.tiktok_ads.config import TikTokAdsSettings
from tiktok_fakes import FakeScheduler, FakeUpstream


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def tiktok_config():
    return TikTokAdsSettings(
        tiktok_client_id="client-123",
        tiktok_client_secret="secret-xyz",
        tiktok_redirect_uri="https://yourapp.com/auth/callback",
        tiktok_token_encryption_key="",
    )
