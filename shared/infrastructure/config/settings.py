"""
Configurações do serviço de integração TikTok Ads.
Carrega variáveis de ambiente e define configurações globais.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Configurações da aplicação carregadas do ambiente."""

    # Aplicação
    app_name: str = "TikTok Ads Integration"
    app_version: str = "1.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"
    port: int = Field(
        default=3000,
        description="Porta de escuta do servidor HTTP"
    )

    # Redis
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="URL de conexão com o Redis"
    )

    # Celery
    celery_broker_url: Optional[str] = None
    celery_result_backend: Optional[str] = None
    celery_worker_concurrency: int = 2

    # Timezone
    timezone: str = "UTC"

    # Observabilidade (coletor OTLP que recebe erros e spans)
    otel_exporter_otlp_endpoint: str = Field(
        default="",
        description="Endpoint do OTel Collector. Vazio desativa a exportação"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def celery_broker(self) -> str:
        """Retorna URL do broker Celery."""
        return self.celery_broker_url or self.redis_url

    @property
    def celery_backend(self) -> str:
        """Retorna URL do backend Celery."""
        return self.celery_result_backend or self.redis_url

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Retorna instância cacheada das configurações.
    Use esta função para obter as configurações em qualquer lugar da aplicação.
    """
    return Settings()


# Instância global para imports diretos
settings = get_settings()
