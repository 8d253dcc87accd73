"""
Exceções customizadas do serviço de integração TikTok Ads.
"""

from typing import Any, Optional


class TikTokAdsException(Exception):
    """Exceção base para erros do serviço."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationException(TikTokAdsException):
    """Configuração obrigatória ausente ou inválida."""

    def __init__(self, setting: str):
        super().__init__(
            message=f"Configuração obrigatória ausente: {setting}",
            details={"setting": setting}
        )
