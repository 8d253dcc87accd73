"""
Serviço de OAuth 2.0 para TikTok Ads.
Gerencia fluxo de autorização, troca de tokens e renovação.
"""

import secrets
from typing import Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from shared.core.exceptions import ConfigurationException
from shared.core.logging import get_logger
from projects.tiktok_ads.client.base import TikTokBusinessClient
from projects.tiktok_ads.config import TikTokAdsSettings, tiktok_settings
from projects.tiktok_ads.exceptions import TikTokAPIError, UpstreamAuthError
from projects.tiktok_ads.schemas.oauth import TokenPair
from projects.tiktok_ads.services.refresh_scheduler import (
    RefreshScheduler,
    compute_refresh_delay,
)
from projects.tiktok_ads.services.token_store import TokenStore

logger = get_logger(__name__)

AUTHORIZE_PATH = "open_api/oauth2/authorize"
ACCESS_TOKEN_PATH = "open_api/oauth2/access_token/"
REFRESH_TOKEN_PATH = "open_api/oauth2/refresh_token/"


class OAuthService:
    """Serviço para fluxo OAuth 2.0 do TikTok for Business."""

    def __init__(
        self,
        api_client: TikTokBusinessClient,
        scheduler: RefreshScheduler,
        token_store: Optional[TokenStore] = None,
        settings: Optional[TikTokAdsSettings] = None,
    ):
        self.client = api_client
        self.scheduler = scheduler
        self.token_store = token_store
        self.settings = settings or tiktok_settings

    @staticmethod
    def generate_state() -> str:
        """Gera state anti-CSRF aleatório, um por requisição."""
        return secrets.token_urlsafe(32)

    def build_authorization_url(self, state: str) -> str:
        """Monta a URL de autorização do TikTok com o state informado."""
        if not self.settings.tiktok_client_id or not self.settings.tiktok_redirect_uri:
            raise ConfigurationException("TIKTOK_CLIENT_ID/TIKTOK_REDIRECT_URI")

        params = urlencode({
            "client_key": self.settings.tiktok_client_id,
            "response_type": "code",
            "scope": ",".join(self.settings.oauth_scopes_list),
            "redirect_uri": self.settings.tiktok_redirect_uri,
            "state": state,
        })
        return f"{self.client.base_url}/{AUTHORIZE_PATH}?{params}"

    async def exchange_code(self, code: str) -> TokenPair:
        """Troca authorization code por access/refresh token."""
        token = await self._request_token(
            ACCESS_TOKEN_PATH,
            {
                "client_key": self.settings.tiktok_client_id,
                "client_secret": self.settings.tiktok_client_secret,
                "code": code,
                "grant_type": "authorization_code",
            },
        )
        logger.info("Code trocado por token", expires_in=token.expires_in)
        return token

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        """Renova o access token a partir do refresh token."""
        token = await self._request_token(
            REFRESH_TOKEN_PATH,
            {
                "client_key": self.settings.tiktok_client_id,
                "client_secret": self.settings.tiktok_client_secret,
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
        )
        logger.info("Token renovado", expires_in=token.expires_in)
        return token

    async def _request_token(self, endpoint: str, payload: dict) -> TokenPair:
        try:
            response = await self.client.post(endpoint, json=payload)
        except TikTokAPIError as e:
            raise UpstreamAuthError(f"Falha na chamada OAuth: {e.message}", cause=e) from e

        try:
            token = TokenPair.model_validate(response.get("data") or {})
        except ValidationError as e:
            raise UpstreamAuthError("Resposta OAuth sem access/refresh token") from e

        # Agenda o próximo refresh antes de devolver o par
        delay = compute_refresh_delay(
            token.expires_in, self.settings.tiktok_token_refresh_margin_seconds
        )
        try:
            await self.scheduler.schedule_refresh(token.refresh_token, delay)
        except Exception as e:
            logger.error("Falha ao agendar refresh", error=str(e), delay_seconds=delay)
            raise UpstreamAuthError(f"Falha ao agendar refresh: {e}") from e

        if self.token_store is not None:
            try:
                await self.token_store.save(token)
            except Exception as e:
                logger.error("Falha ao armazenar token", error=str(e))
                raise UpstreamAuthError(f"Falha ao armazenar token: {e}") from e

        return token
