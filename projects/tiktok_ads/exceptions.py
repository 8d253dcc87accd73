"""Erros das chamadas à TikTok Business API."""

from typing import Optional

from shared.core.exceptions import TikTokAdsException


class TikTokAPIError(TikTokAdsException):
    """Chamada à API falhou (transporte, status HTTP ou envelope com code != 0)."""

    def __init__(
        self,
        message: str,
        code: int = 0,
        request_id: str = "",
        status_code: Optional[int] = None,
    ):
        super().__init__(
            message,
            details={"code": code, "request_id": request_id, "status_code": status_code},
        )
        self.code = code
        self.request_id = request_id
        self.status_code = status_code


class UpstreamError(TikTokAdsException):
    """Base das falhas por família de chamada."""

    def __init__(self, message: str, cause: Optional[TikTokAPIError] = None):
        details = dict(cause.details) if cause else {}
        super().__init__(message, details=details)


class UpstreamAuthError(UpstreamError):
    """Troca de code ou refresh de token falhou."""


class UpstreamCampaignError(UpstreamError):
    """Criação de campanha falhou."""


class UpstreamReportError(UpstreamError):
    """Consulta de relatório falhou."""
