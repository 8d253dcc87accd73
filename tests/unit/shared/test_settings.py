"""Testes dos defaults de configuração."""

from shared.infrastructure.config.settings import Settings
from projects.tiktok_ads.config import TikTokAdsSettings


def test_service_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)

    config = Settings(_env_file=None)

    assert config.port == 3000
    assert config.redis_url == "redis://localhost:6379/0"
    assert config.celery_broker == config.redis_url


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")

    assert Settings(_env_file=None).port == 8080


def test_tiktok_defaults():
    config = TikTokAdsSettings(_env_file=None)

    assert config.tiktok_api_base_url == "https://business-api.tiktok.com"
    assert config.tiktok_token_refresh_margin_seconds == 60
    assert config.oauth_scopes_list == [
        "business.customers.read",
        "business.ad.read",
        "business.ad.report.write",
    ]


def test_token_store_requires_encryption_key():
    assert TikTokAdsSettings(_env_file=None, tiktok_token_encryption_key="").token_store_enabled is False
    assert TikTokAdsSettings(_env_file=None, tiktok_token_encryption_key="00" * 32).token_store_enabled is True
