"""
Configurações do módulo TikTok Ads.
Carrega variáveis de ambiente específicas para integração com a TikTok Business API.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class TikTokAdsSettings(BaseSettings):
    """Configurações para integração com a TikTok Business API."""

    # OAuth / App
    tiktok_client_id: str = Field(
        default="",
        description="Client key do app TikTok for Business"
    )
    tiktok_client_secret: str = Field(
        default="",
        description="Secret do app TikTok for Business"
    )
    tiktok_redirect_uri: str = Field(
        default="",
        description="URL de callback OAuth registrada no app"
    )
    tiktok_oauth_scopes: str = Field(
        default="business.customers.read,business.ad.read,business.ad.report.write",
        description="Escopos OAuth separados por vírgula"
    )
    tiktok_oauth_verify_state: bool = Field(
        default=True,
        description="Exige que o state do callback confira com o cookie emitido em /auth/url"
    )

    # API
    tiktok_api_base_url: str = Field(
        default="https://business-api.tiktok.com",
        description="URL base da TikTok Business API"
    )
    tiktok_api_version: str = Field(
        default="v1.3",
        description="Versão dos endpoints de campanha e relatório"
    )
    tiktok_request_timeout: float = Field(
        default=30.0,
        description="Timeout (segundos) de cada chamada à API"
    )

    # Token
    tiktok_token_refresh_margin_seconds: int = Field(
        default=60,
        description="Segundos antes da expiração em que o refresh é agendado"
    )
    tiktok_token_refresh_max_retries: int = Field(
        default=3,
        description="Tentativas do Celery para um refresh que falhou"
    )
    tiktok_token_refresh_retry_delay: int = Field(
        default=60,
        description="Segundos entre tentativas de refresh"
    )
    tiktok_token_store_url: str = Field(
        default="",
        description="URL do Redis onde o token vigente é guardado (default: REDIS_URL)"
    )
    tiktok_token_encryption_key: str = Field(
        default="",
        description="Chave AES-256-GCM (64 hex chars). Vazio desativa o token store"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def oauth_scopes_list(self) -> list[str]:
        """Lista de escopos OAuth."""
        return [scope.strip() for scope in self.tiktok_oauth_scopes.split(",") if scope.strip()]

    @property
    def token_store_enabled(self) -> bool:
        return bool(self.tiktok_token_encryption_key)


@lru_cache()
def get_tiktok_ads_settings() -> TikTokAdsSettings:
    """
    Retorna instância cacheada das configurações do TikTok Ads.
    Use esta função para obter as configurações em qualquer lugar do módulo.
    """
    return TikTokAdsSettings()


# Instância global para imports diretos
tiktok_settings = get_tiktok_ads_settings()
